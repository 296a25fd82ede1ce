"""TaskStore SQLite 实现

Task 的读取总是带上完整的审计记录与评论子集合。
update_task 实现分离对象图的回写：覆盖可变标量字段，
子集合只插入存储中尚不存在的 ID。
此处仅提供数据库操作，事务边界由 store.transaction 管理。
"""

from dataclasses import dataclass

import aiosqlite

from ..exceptions import ChildOwnershipError
from ..models.task import Task
from .comment_store import SqliteCommentStore
from .history_store import SqliteTaskHistoryStore
from .reconcile import insert_new_children
from .timefmt import format_ts, parse_ts

_COLUMNS = "task_id, project_id, title, description, due_date, status, priority, created_at"


@dataclass(frozen=True)
class TaskWriteResult:
    """一次回写实际插入的子记录数"""

    history_inserted: int
    comments_inserted: int


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(
        self,
        conn: aiosqlite.Connection,
        history_store: SqliteTaskHistoryStore,
        comment_store: SqliteCommentStore,
    ) -> None:
        self._conn = conn
        self._history_store = history_store
        self._comment_store = comment_store

    async def create_task(self, task: Task) -> None:
        """写入任务标量行及其全部子记录（不自动提交）"""
        _check_ownership(task)
        await self._conn.execute(
            f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                task.task_id,
                task.project_id,
                task.title,
                task.description,
                format_ts(task.due_date),
                task.status.value,
                task.priority.value,
                format_ts(task.created_at),
            ),
        )
        for entry in task.history:
            await self._history_store.append_history(entry)
        for comment in task.comments:
            await self._comment_store.append_comment(comment)

    async def update_task(self, task: Task) -> TaskWriteResult | None:
        """回写一个加载后在内存中修改过的 Task（不自动提交）

        0. 子记录归属检查，发现他人的子记录时不写任何数据
        1. 按 task_id 覆盖可变标量字段（project_id / created_at 创建后不变）
        2. 审计记录：对比存储中的 ID 集合，只插入新记录
        3. 评论：同样的 ID 差集处理，彼此独立

        Returns:
            插入统计；标量行不存在时返回 None（不写任何子记录）

        Raises:
            ChildOwnershipError: 子记录的 task_id 不是本任务
        """
        _check_ownership(task)
        cursor = await self._conn.execute(
            """
            UPDATE tasks
            SET title = ?, description = ?, due_date = ?, status = ?, priority = ?
            WHERE task_id = ?
            """,
            (
                task.title,
                task.description,
                format_ts(task.due_date),
                task.status.value,
                task.priority.value,
                task.task_id,
            ),
        )
        if cursor.rowcount == 0:
            return None

        new_history = await insert_new_children(
            task.task_id,
            task.history,
            child_id=lambda h: h.history_id,
            load_persisted_ids=self._history_store.get_history_ids_for_task,
            insert=self._history_store.append_history,
        )
        new_comments = await insert_new_children(
            task.task_id,
            task.comments,
            child_id=lambda c: c.comment_id,
            load_persisted_ids=self._comment_store.get_comment_ids_for_task,
            insert=self._comment_store.append_comment,
        )
        return TaskWriteResult(
            history_inserted=len(new_history),
            comments_inserted=len(new_comments),
        )

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务（含审计记录与评论）"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return await self._load_aggregate(row)

    async def list_project_tasks(self, project_id: str) -> list[Task]:
        """查询项目内所有任务，按创建时间正序"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM tasks
            WHERE project_id = ?
            ORDER BY created_at ASC, rowid ASC
            """,
            (project_id,),
        )
        rows = await cursor.fetchall()
        return [await self._load_aggregate(row) for row in rows]

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，审计记录与评论由外键级联删除（不自动提交）"""
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE task_id = ?",
            (task_id,),
        )
        return cursor.rowcount > 0

    async def _load_aggregate(self, row: aiosqlite.Row) -> Task:
        """将数据库行及其子记录组装为 Task 聚合"""
        task_id = row[0]
        return Task(
            task_id=task_id,
            project_id=row[1],
            title=row[2],
            description=row[3],
            due_date=parse_ts(row[4]),
            status=row[5],
            priority=row[6],
            created_at=parse_ts(row[7]),
            history=await self._history_store.get_history_for_task(task_id),
            comments=await self._comment_store.get_comments_for_task(task_id),
        )


def _check_ownership(task: Task) -> None:
    foreign = task.foreign_child_ids()
    if foreign:
        raise ChildOwnershipError(task.task_id, foreign)

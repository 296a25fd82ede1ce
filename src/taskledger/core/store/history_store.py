"""TaskHistoryStore SQLite 实现

审计表 append-only：只允许插入，不允许更新；仅随 Task 级联删除。
"""

from datetime import datetime

import aiosqlite

from ..models.enums import TaskStatus
from ..models.history import TaskHistory, status_change_description
from .timefmt import format_ts, parse_ts

_COLUMNS = "history_id, task_id, description, ts, user_id"


class SqliteTaskHistoryStore:
    """TaskHistoryStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_history(self, entry: TaskHistory) -> None:
        """追加审计记录（append-only）

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            f"INSERT INTO task_history ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (
                entry.history_id,
                entry.task_id,
                entry.description,
                format_ts(entry.ts),
                entry.user_id,
            ),
        )

    async def get_history_for_task(self, task_id: str) -> list[TaskHistory]:
        """查询指定任务的所有审计记录，按时间正序（同一时刻按写入顺序）"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM task_history WHERE task_id = ? ORDER BY ts ASC, rowid ASC",
            (task_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_history(row) for row in rows]

    async def get_history_ids_for_task(self, task_id: str) -> set[str]:
        """查询指定任务当前已持久化的审计记录 ID 集合"""
        cursor = await self._conn.execute(
            "SELECT history_id FROM task_history WHERE task_id = ?",
            (task_id,),
        )
        rows = await cursor.fetchall()
        return {row[0] for row in rows}

    async def count_completed_by_user_since(self, user_id: str, since: datetime) -> int:
        """统计 since 之后由 user_id 推进到 Completed 的任务数（同一任务只计一次）"""
        cursor = await self._conn.execute(
            """
            SELECT COUNT(DISTINCT task_id) FROM task_history
            WHERE user_id = ? AND description = ? AND ts >= ?
            """,
            (user_id, status_change_description(TaskStatus.COMPLETED), format_ts(since)),
        )
        row = await cursor.fetchone()
        return row[0] if row else 0

    @staticmethod
    def _row_to_history(row: aiosqlite.Row) -> TaskHistory:
        """将数据库行转换为 TaskHistory 模型"""
        return TaskHistory(
            history_id=row[0],
            task_id=row[1],
            description=row[2],
            ts=parse_ts(row[3]),
            user_id=row[4],
        )

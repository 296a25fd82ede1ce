"""ProjectStore SQLite 实现

Project 的读取带上项目内全部 Task 聚合，
容量与删除资格判定依赖完整的任务集合。
"""

import aiosqlite

from ..models.project import Project
from .task_store import SqliteTaskStore
from .timefmt import format_ts, parse_ts

_COLUMNS = "project_id, name, description, user_id, created_at"


class SqliteProjectStore:
    """ProjectStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection, task_store: SqliteTaskStore) -> None:
        self._conn = conn
        self._task_store = task_store

    async def create_project(self, project: Project) -> None:
        """写入项目标量行（不自动提交）

        项目内已挂载的任务一并写入。
        """
        await self._conn.execute(
            f"INSERT INTO projects ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (
                project.project_id,
                project.name,
                project.description,
                project.user_id,
                format_ts(project.created_at),
            ),
        )
        for task in project.tasks:
            await self._task_store.create_task(task)

    async def get_project(self, project_id: str) -> Project | None:
        """根据 project_id 查询项目（含任务）"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM projects WHERE project_id = ?",
            (project_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return await self._load_aggregate(row)

    async def list_user_projects(self, user_id: str) -> list[Project]:
        """查询用户拥有的项目，按创建时间正序"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM projects
            WHERE user_id = ?
            ORDER BY created_at ASC, rowid ASC
            """,
            (user_id,),
        )
        rows = await cursor.fetchall()
        return [await self._load_aggregate(row) for row in rows]

    async def delete_project(self, project_id: str) -> bool:
        """删除项目，任务及其子记录由外键级联删除（不自动提交）"""
        cursor = await self._conn.execute(
            "DELETE FROM projects WHERE project_id = ?",
            (project_id,),
        )
        return cursor.rowcount > 0

    async def _load_aggregate(self, row: aiosqlite.Row) -> Project:
        project_id = row[0]
        return Project(
            project_id=project_id,
            name=row[1],
            description=row[2],
            user_id=row[3],
            created_at=parse_ts(row[4]),
            tasks=await self._task_store.list_project_tasks(project_id),
        )

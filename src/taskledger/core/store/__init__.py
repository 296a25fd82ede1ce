"""TaskLedger Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

import asyncio
from pathlib import Path

import aiosqlite

from .comment_store import SqliteCommentStore
from .history_store import SqliteTaskHistoryStore
from .project_store import SqliteProjectStore
from .reconcile import insert_new_children
from .sqlite_init import init_db
from .task_store import SqliteTaskStore, TaskWriteResult
from .transaction import (
    atomic,
    create_project,
    create_task_in_project,
    delete_project_if_completed,
    delete_task,
    save_task,
)
from .user_store import SqliteUserStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接

    同一连接上的读会看到该连接尚未提交的写入，conn_lock 因此同时串行化
    读操作与 “加载 -> 修改 -> 回写” 周期，读者只会看到已提交的状态。
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.conn_lock = asyncio.Lock()
        self.user_store = SqliteUserStore(conn)
        self.history_store = SqliteTaskHistoryStore(conn)
        self.comment_store = SqliteCommentStore(conn)
        self.task_store = SqliteTaskStore(conn, self.history_store, self.comment_store)
        self.project_store = SqliteProjectStore(conn, self.task_store)

    async def close(self) -> None:
        await self.conn.close()


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteUserStore",
    "SqliteProjectStore",
    "SqliteTaskStore",
    "SqliteTaskHistoryStore",
    "SqliteCommentStore",
    "TaskWriteResult",
    "init_db",
    "insert_new_children",
    "atomic",
    "create_project",
    "create_task_in_project",
    "delete_project_if_completed",
    "delete_task",
    "save_task",
]

"""UserStore SQLite 实现 -- 外部用户资料的只读视图

create_user 仅用于初始化与测试数据。
"""

import aiosqlite

from ..models.user import User


class SqliteUserStore:
    """UserStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_user(self, user: User) -> None:
        """写入用户资料（不自动提交）"""
        await self._conn.execute(
            "INSERT INTO users (user_id, name, role) VALUES (?, ?, ?)",
            (user.user_id, user.name, user.role.value),
        )

    async def get_user(self, user_id: str) -> User | None:
        cursor = await self._conn.execute(
            "SELECT user_id, name, role FROM users WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return User(user_id=row[0], name=row[1], role=row[2])

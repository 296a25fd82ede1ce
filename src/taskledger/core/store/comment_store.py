"""CommentStore SQLite 实现

评论表 append-only：只允许插入，不允许更新；仅随 Task 级联删除。
"""

import aiosqlite

from ..models.comment import Comment
from .timefmt import format_ts, parse_ts

_COLUMNS = "comment_id, task_id, content, created_at, user_id"


class SqliteCommentStore:
    """CommentStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_comment(self, comment: Comment) -> None:
        """追加评论（append-only，不自动提交）"""
        await self._conn.execute(
            f"INSERT INTO comments ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (
                comment.comment_id,
                comment.task_id,
                comment.content,
                format_ts(comment.created_at),
                comment.user_id,
            ),
        )

    async def get_comments_for_task(self, task_id: str) -> list[Comment]:
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM comments WHERE task_id = ? ORDER BY created_at ASC, rowid ASC",
            (task_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_comment(row) for row in rows]

    async def get_comment_ids_for_task(self, task_id: str) -> set[str]:
        cursor = await self._conn.execute(
            "SELECT comment_id FROM comments WHERE task_id = ?",
            (task_id,),
        )
        rows = await cursor.fetchall()
        return {row[0] for row in rows}

    @staticmethod
    def _row_to_comment(row: aiosqlite.Row) -> Comment:
        return Comment(
            comment_id=row[0],
            task_id=row[1],
            content=row[2],
            created_at=parse_ts(row[3]),
            user_id=row[4],
        )

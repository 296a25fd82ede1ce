"""TaskLedger Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .comment import Comment
from .enums import TaskPriority, TaskStatus, UserRole
from .history import (
    TASK_CREATED_DESCRIPTION,
    TaskHistory,
    comment_added_description,
    status_change_description,
)
from .project import Project
from .report import TaskCompletionReport
from .task import Task
from .user import User

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "UserRole",
    # Task 聚合
    "Task",
    "TaskHistory",
    "Comment",
    "TASK_CREATED_DESCRIPTION",
    "status_change_description",
    "comment_added_description",
    # Project 聚合
    "Project",
    # 外部资料与报表
    "User",
    "TaskCompletionReport",
]

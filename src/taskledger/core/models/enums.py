"""枚举定义

包含 TaskStatus、TaskPriority、UserRole 枚举。
TaskStatus 不设流转图：任意状态可以流转到任意其他状态，
唯一约束是目标状态必须与当前状态不同（相同时为 no-op）。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态"""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


class TaskPriority(StrEnum):
    """Task 优先级"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class UserRole(StrEnum):
    """用户角色"""

    MEMBER = "Member"
    MANAGER = "Manager"

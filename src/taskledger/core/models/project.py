"""Project Domain Model -- 聚合根

Project 拥有 Task 集合（级联删除），自身没有状态。
容量与删除资格是跨聚合的约束：此处只提供判定，
由 store.transaction 中的编排操作在同一事务内检查并执行。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field
from ulid import ULID

from ..config import PROJECT_TASK_LIMIT
from .enums import TaskStatus
from .task import Task


class Project(BaseModel):
    """Project 数据模型"""

    project_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(description="项目名称")
    description: str = Field(default="", description="项目描述")
    user_id: str = Field(description="所有者 ID")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )
    tasks: list[Task] = Field(default_factory=list, description="项目内任务")

    @classmethod
    def create(cls, name: str, description: str, user_id: str) -> "Project":
        return cls(
            project_id=str(ULID()),
            name=name,
            description=description,
            user_id=user_id,
        )

    def can_add_task(self) -> bool:
        """当前任务数未达上限时可以加入新任务"""
        return len(self.tasks) < PROJECT_TASK_LIMIT

    def can_be_deleted(self) -> bool:
        """所有任务均为 Completed 时可删除（空项目恒可删除）"""
        return not any(t.status != TaskStatus.COMPLETED for t in self.tasks)

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    @property
    def completed_task_count(self) -> int:
        return sum(1 for t in self.tasks if t.status == TaskStatus.COMPLETED)

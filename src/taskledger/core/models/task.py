"""Task Domain Model -- 聚合根

Task 拥有有序的 TaskHistory 与 Comment 子集合，是一致性单元。
状态与评论只能通过 update_status / add_comment 修改，
每次状态变化都伴随一条审计记录，因此 history 是聚合完整的因果历史。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator, model_validator
from ulid import ULID

from .comment import Comment
from .enums import TaskPriority, TaskStatus
from .history import (
    TASK_CREATED_DESCRIPTION,
    TaskHistory,
    comment_added_description,
    status_change_description,
)


class Task(BaseModel):
    """Task 数据模型

    构造即持有至少一条审计记录（创建记录）。
    新建任务请使用 Task.create()；直接构造仅用于从存储加载。
    """

    task_id: str = Field(description="唯一标识，ULID 格式")
    project_id: str = Field(description="所属 Project ID")
    title: str = Field(description="任务标题")
    description: str = Field(default="", description="任务描述")
    due_date: datetime = Field(description="截止时间")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )
    history: list[TaskHistory] = Field(description="审计记录，按时间正序")
    comments: list[Comment] = Field(default_factory=list, description="评论，按时间正序")

    @field_validator("due_date", "created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # naive 时间按 UTC 解释，与存储格式一致
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @model_validator(mode="after")
    def _require_creation_record(self) -> "Task":
        if not self.history:
            raise ValueError("Task must carry at least one history entry")
        foreign = self.foreign_child_ids()
        if foreign:
            raise ValueError(
                f"Task {self.task_id} carries children owned by other tasks: {foreign}"
            )
        return self

    def foreign_child_ids(self) -> list[str]:
        """task_id 不是本任务的审计记录 / 评论 ID

        history / comments 是普通 list，构造之后仍可被直接追加，
        回写前需要再次检查。
        """
        return [
            h.history_id for h in self.history if h.task_id != self.task_id
        ] + [c.comment_id for c in self.comments if c.task_id != self.task_id]

    @classmethod
    def create(
        cls,
        title: str,
        description: str,
        due_date: datetime,
        priority: TaskPriority,
        project_id: str,
    ) -> "Task":
        """创建新任务：状态强制为 Pending，并写入一条无操作者的创建记录"""
        task_id = str(ULID())
        return cls(
            task_id=task_id,
            project_id=project_id,
            title=title,
            description=description,
            due_date=due_date,
            status=TaskStatus.PENDING,
            priority=priority,
            history=[TaskHistory(task_id=task_id, description=TASK_CREATED_DESCRIPTION)],
        )

    def update_status(self, new_status: TaskStatus, user_id: str) -> bool:
        """变更状态

        目标状态与当前状态相同时为 no-op（不产生审计记录）。
        不限制流转方向，任意状态可到达任意其他状态。

        Returns:
            True 如果状态发生了变化
        """
        if self.status == new_status:
            return False
        self.status = new_status
        self._add_history(status_change_description(new_status), user_id)
        return True

    def add_comment(self, content: str, user_id: str) -> Comment:
        """追加评论，同时追加一条描述评论内容的审计记录"""
        comment = Comment(task_id=self.task_id, content=content, user_id=user_id)
        self.comments.append(comment)
        self._add_history(comment_added_description(content), user_id)
        return comment

    def _add_history(self, description: str, user_id: str | None = None) -> None:
        self.history.append(
            TaskHistory(task_id=self.task_id, description=description, user_id=user_id)
        )

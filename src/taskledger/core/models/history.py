"""TaskHistory Domain Model -- 审计记录

审计记录 append-only：创建后不可修改，也不会被单独删除。
只能由 Task 聚合的操作追加，随 Task 级联删除。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

from .enums import TaskStatus

TASK_CREATED_DESCRIPTION = "Task created"


def status_change_description(status: TaskStatus) -> str:
    """状态变更审计描述（完成率报表按此描述过滤）"""
    return f"Status changed to {status.value}"


def comment_added_description(content: str) -> str:
    return f"Comment added: {content}"


class TaskHistory(BaseModel):
    """TaskHistory 数据模型

    user_id 为空表示系统生成的记录（例如任务创建）。
    """

    model_config = ConfigDict(frozen=True)

    history_id: str = Field(
        default_factory=lambda: str(ULID()),
        description="唯一标识，ULID 格式",
    )
    task_id: str = Field(description="所属 Task ID")
    description: str = Field(description="发生了什么")
    ts: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="记录时间戳",
    )
    user_id: str | None = Field(default=None, description="操作者 ID，系统记录为空")

"""Comment Domain Model

评论 append-only，与 TaskHistory 相同的归属规则。
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID


class Comment(BaseModel):
    """Comment 数据模型"""

    model_config = ConfigDict(frozen=True)

    comment_id: str = Field(
        default_factory=lambda: str(ULID()),
        description="唯一标识，ULID 格式",
    )
    task_id: str = Field(description="所属 Task ID")
    content: str = Field(description="评论内容")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="创建时间",
    )
    user_id: str = Field(description="作者 ID")

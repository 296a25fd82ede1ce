"""User Domain Model -- 外部只读资料，仅通过 ID 引用"""

from pydantic import BaseModel, Field

from .enums import UserRole


class User(BaseModel):
    """用户资料"""

    user_id: str = Field(description="唯一标识")
    name: str = Field(description="用户名称")
    role: UserRole = Field(default=UserRole.MEMBER, description="用户角色")

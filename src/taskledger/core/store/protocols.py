"""Store Protocol 接口定义

定义 TaskStore、ProjectStore、UserStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
写方法均不提交事务，事务边界见 store.transaction。
"""

from typing import Protocol, runtime_checkable

from ..models.project import Project
from ..models.task import Task
from ..models.user import User
from .task_store import TaskWriteResult


@runtime_checkable
class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> None:
        """写入任务标量行及全部子记录"""
        ...

    async def update_task(self, task: Task) -> TaskWriteResult | None:
        """回写修改过的任务：标量覆盖 + 子集合按 ID 差集插入"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 task_id 查询任务（含审计记录与评论）"""
        ...

    async def list_project_tasks(self, project_id: str) -> list[Task]:
        """查询项目内的任务"""
        ...

    async def delete_task(self, task_id: str) -> bool:
        """删除任务（级联删除子记录）"""
        ...


@runtime_checkable
class ProjectStore(Protocol):
    """Project 存储接口"""

    async def create_project(self, project: Project) -> None:
        ...

    async def get_project(self, project_id: str) -> Project | None:
        ...

    async def list_user_projects(self, user_id: str) -> list[Project]:
        ...

    async def delete_project(self, project_id: str) -> bool:
        ...


@runtime_checkable
class UserStore(Protocol):
    """User 存储接口（只读）"""

    async def get_user(self, user_id: str) -> User | None:
        ...

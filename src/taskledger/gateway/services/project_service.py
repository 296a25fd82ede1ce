"""ProjectService -- 项目创建/查询/删除

读写都持有 StoreGroup.conn_lock，见 TaskService。
"""

from taskledger.core.exceptions import ProjectNotFoundError
from taskledger.core.models import Project
from taskledger.core.store import (
    StoreGroup,
    create_project,
    delete_project_if_completed,
)


class ProjectService:
    """项目业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def create_project(self, name: str, description: str, user_id: str) -> Project:
        project = Project.create(name, description, user_id)
        async with self._stores.conn_lock:
            return await create_project(
                self._stores.conn,
                self._stores.project_store,
                project,
            )

    async def get_project(self, project_id: str) -> Project:
        """查询项目（含任务）

        Raises:
            ProjectNotFoundError: 项目不存在
        """
        async with self._stores.conn_lock:
            project = await self._stores.project_store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def list_user_projects(self, user_id: str) -> list[Project]:
        async with self._stores.conn_lock:
            return await self._stores.project_store.list_user_projects(user_id)

    async def delete_project(self, project_id: str) -> None:
        """删除项目（仅当所有任务均已完成）

        Raises:
            ProjectNotFoundError: 项目不存在
            DeletionBlockedError: 仍有未完成任务
        """
        async with self._stores.conn_lock:
            await delete_project_if_completed(
                self._stores.conn,
                self._stores.project_store,
                project_id,
            )

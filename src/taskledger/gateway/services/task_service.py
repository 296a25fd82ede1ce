"""TaskService -- 任务创建/状态变更/评论/删除/报表业务逻辑

状态变更与评论遵循同一流程：
1. 加载完整 Task 聚合（含审计记录与评论）
2. 通过聚合操作在内存中修改
3. 将同一对象交回 save_task，由存储按子记录 ID 差集增量回写

整个周期在 StoreGroup.conn_lock 内执行（单进程单写者）。
读操作同样持有 conn_lock，不会读到进行中事务的部分写入。
"""

from datetime import UTC, datetime, timedelta

import structlog
from taskledger.core.config import get_report_window_days
from taskledger.core.exceptions import TaskNotFoundError
from taskledger.core.models import (
    Comment,
    Task,
    TaskCompletionReport,
    TaskPriority,
    TaskStatus,
)
from taskledger.core.store import (
    StoreGroup,
    create_task_in_project,
    delete_task,
    save_task,
)

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def create_task(
        self,
        project_id: str,
        title: str,
        description: str,
        due_date: datetime,
        priority: TaskPriority,
    ) -> Task:
        """创建任务（容量检查与写入在同一事务内完成）

        Raises:
            ProjectNotFoundError: 项目不存在
            CapacityExceededError: 项目任务数已达上限
        """
        task = Task.create(title, description, due_date, priority, project_id)
        async with self._stores.conn_lock:
            return await create_task_in_project(
                self._stores.conn,
                self._stores.project_store,
                self._stores.task_store,
                task,
            )

    async def get_task(self, task_id: str) -> Task:
        """查询任务详情

        Raises:
            TaskNotFoundError: 任务不存在
        """
        async with self._stores.conn_lock:
            return await self._load(task_id)

    async def list_project_tasks(self, project_id: str) -> list[Task]:
        async with self._stores.conn_lock:
            return await self._stores.task_store.list_project_tasks(project_id)

    async def update_status(self, task_id: str, status: TaskStatus, user_id: str) -> Task:
        """变更任务状态

        目标状态与当前状态相同时不产生审计记录，回写也不会插入任何子记录。
        """
        async with self._stores.conn_lock:
            task = await self._load(task_id)
            changed = task.update_status(status, user_id)
            await save_task(self._stores.conn, self._stores.task_store, task)

        if not changed:
            await log.ainfo(
                "task_status_unchanged",
                task_id=task_id,
                status=status.value,
            )
        return task

    async def add_comment(self, task_id: str, content: str, user_id: str) -> Comment:
        """追加评论，返回新评论"""
        async with self._stores.conn_lock:
            task = await self._load(task_id)
            comment = task.add_comment(content, user_id)
            await save_task(self._stores.conn, self._stores.task_store, task)
        return comment

    async def delete_task(self, task_id: str) -> None:
        """删除任务

        Raises:
            TaskNotFoundError: 任务不存在
        """
        async with self._stores.conn_lock:
            await delete_task(self._stores.conn, self._stores.task_store, task_id)

    async def completion_report(
        self,
        user_id: str,
        days: int | None = None,
    ) -> TaskCompletionReport:
        """统计用户在最近 days 天内推进到 Completed 的任务数

        权限检查（是否为 manager）属于边界层，调用前完成。
        """
        window_days = days or get_report_window_days()
        since = datetime.now(UTC) - timedelta(days=window_days)
        async with self._stores.conn_lock:
            count = await self._stores.history_store.count_completed_by_user_since(
                user_id, since
            )
        return TaskCompletionReport.build(user_id, window_days, count)

    async def _load(self, task_id: str) -> Task:
        # 调用方需已持有 conn_lock
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

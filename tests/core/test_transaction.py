"""编排事务测试 -- 容量准入、删除资格、级联删除

测试内容：
1. 第 21 个任务在写入前被拒绝
2. 有未完成任务时项目删除被拒绝，数据不变
3. 删除项目级联删除任务、审计记录与评论
4. 删除任务级联删除子记录
"""

import aiosqlite
import pytest
from taskledger.core.config import PROJECT_TASK_LIMIT
from taskledger.core.exceptions import (
    CapacityExceededError,
    DeletionBlockedError,
    ProjectNotFoundError,
    TaskNotFoundError,
)
from taskledger.core.models import TaskStatus
from taskledger.core.store import (
    create_task_in_project,
    delete_project_if_completed,
    delete_task,
    save_task,
)


async def _table_count(conn: aiosqlite.Connection, table: str) -> int:
    cursor = await conn.execute(f"SELECT COUNT(*) FROM {table}")
    row = await cursor.fetchone()
    return row[0]


async def _admit(store_group, task):
    return await create_task_in_project(
        store_group.conn,
        store_group.project_store,
        store_group.task_store,
        task,
    )


async def _complete(store_group, task_id: str) -> None:
    task = await store_group.task_store.get_task(task_id)
    task.update_status(TaskStatus.COMPLETED, "user-a")
    await save_task(store_group.conn, store_group.task_store, task)


class TestTaskAdmission:

    async def test_task_rejected_at_capacity(self, store_group, project, make_task):
        for _ in range(PROJECT_TASK_LIMIT):
            await _admit(store_group, make_task(project.project_id))

        with pytest.raises(CapacityExceededError) as exc_info:
            await _admit(store_group, make_task(project.project_id))

        assert exc_info.value.limit == PROJECT_TASK_LIMIT
        assert await _table_count(store_group.conn, "tasks") == PROJECT_TASK_LIMIT
        assert await _table_count(store_group.conn, "task_history") == PROJECT_TASK_LIMIT
        assert store_group.conn.in_transaction is False

    async def test_unknown_project_rejected(self, store_group, make_task):
        with pytest.raises(ProjectNotFoundError):
            await _admit(store_group, make_task("missing-project"))

        assert await _table_count(store_group.conn, "tasks") == 0

    async def test_twentieth_task_fills_project(self, store_group, project, make_task):
        """19 个已完成任务 -> 第 20 个可加入 -> 全部完成后可删除"""
        for _ in range(19):
            task = await _admit(store_group, make_task(project.project_id))
            await _complete(store_group, task.task_id)

        before = await store_group.project_store.get_project(project.project_id)
        assert before.can_add_task() is True

        last = await _admit(store_group, make_task(project.project_id))
        after = await store_group.project_store.get_project(project.project_id)
        assert after.can_add_task() is False
        assert after.can_be_deleted() is False

        await _complete(store_group, last.task_id)
        done = await store_group.project_store.get_project(project.project_id)
        assert done.can_be_deleted() is True


class TestProjectDeletion:

    async def test_deletion_blocked_by_unfinished_task(self, store_group, project, make_task):
        await _admit(store_group, make_task(project.project_id))
        finished = await _admit(store_group, make_task(project.project_id))
        await _complete(store_group, finished.task_id)

        with pytest.raises(DeletionBlockedError) as exc_info:
            await delete_project_if_completed(
                store_group.conn, store_group.project_store, project.project_id
            )

        assert exc_info.value.unfinished_count == 1
        assert await store_group.project_store.get_project(project.project_id) is not None
        assert await _table_count(store_group.conn, "tasks") == 2

    async def test_empty_project_deleted(self, store_group, project):
        await delete_project_if_completed(
            store_group.conn, store_group.project_store, project.project_id
        )

        assert await store_group.project_store.get_project(project.project_id) is None

    async def test_deletion_cascades_to_tasks_and_children(
        self, store_group, project, make_task
    ):
        task = make_task(project.project_id)
        task.add_comment("收尾", "user-a")
        task.update_status(TaskStatus.COMPLETED, "user-a")
        await _admit(store_group, task)

        await delete_project_if_completed(
            store_group.conn, store_group.project_store, project.project_id
        )

        for table in ("projects", "tasks", "task_history", "comments"):
            assert await _table_count(store_group.conn, table) == 0

    async def test_missing_project_raises_not_found(self, store_group):
        with pytest.raises(ProjectNotFoundError):
            await delete_project_if_completed(
                store_group.conn, store_group.project_store, "missing"
            )


class TestTaskDeletion:

    async def test_delete_task_cascades_children(self, store_group, project, make_task):
        task = make_task(project.project_id)
        task.add_comment("待删除", "user-a")
        await _admit(store_group, task)

        await delete_task(store_group.conn, store_group.task_store, task.task_id)

        assert await store_group.task_store.get_task(task.task_id) is None
        assert await _table_count(store_group.conn, "task_history") == 0
        assert await _table_count(store_group.conn, "comments") == 0

    async def test_delete_missing_task_raises(self, store_group):
        with pytest.raises(TaskNotFoundError):
            await delete_task(store_group.conn, store_group.task_store, "missing")

"""TaskService 并发读写测试

写事务在子记录插入途中挂起时，同一 StoreGroup 上的读操作
必须等待，且只能看到已提交的状态。
"""

import asyncio
from datetime import UTC, datetime, timedelta

import aiosqlite
import pytest
from taskledger.core.exceptions import ReconciliationError
from taskledger.core.models import TaskPriority
from taskledger.gateway.services.project_service import ProjectService
from taskledger.gateway.services.task_service import TaskService


@pytest.fixture
def service(store_group) -> TaskService:
    return TaskService(store_group)


async def _stall_comment_insert(store_group, monkeypatch) -> tuple[asyncio.Event, asyncio.Event]:
    """让 append_comment 挂起，放行后以存储错误失败"""
    entered = asyncio.Event()
    release = asyncio.Event()

    async def _stalled(comment):
        entered.set()
        await release.wait()
        raise aiosqlite.OperationalError("disk I/O error")

    monkeypatch.setattr(store_group.comment_store, "append_comment", _stalled)
    return entered, release


class TestReadIsolation:

    async def test_get_task_never_sees_partial_write(
        self, service, store_group, project, monkeypatch
    ):
        task = await service.create_task(
            project.project_id,
            "对账",
            "",
            datetime.now(UTC) + timedelta(days=1),
            TaskPriority.LOW,
        )
        entered, release = await _stall_comment_insert(store_group, monkeypatch)

        writer = asyncio.create_task(service.add_comment(task.task_id, "x", "user-a"))
        await entered.wait()
        # 此时 "Comment added: x" 审计记录已写入但未提交
        reader = asyncio.create_task(service.get_task(task.task_id))
        await asyncio.sleep(0.05)
        assert not reader.done()

        release.set()
        with pytest.raises(ReconciliationError):
            await writer
        seen = await reader

        assert [h.description for h in seen.history] == ["Task created"]
        assert seen.comments == []

    async def test_project_read_waits_for_inflight_write(
        self, service, store_group, project, monkeypatch
    ):
        task = await service.create_task(
            project.project_id,
            "对账",
            "",
            datetime.now(UTC) + timedelta(days=1),
            TaskPriority.LOW,
        )
        entered, release = await _stall_comment_insert(store_group, monkeypatch)

        writer = asyncio.create_task(service.add_comment(task.task_id, "y", "user-a"))
        await entered.wait()
        reader = asyncio.create_task(
            ProjectService(store_group).get_project(project.project_id)
        )
        await asyncio.sleep(0.05)
        assert not reader.done()

        release.set()
        with pytest.raises(ReconciliationError):
            await writer
        seen = await reader

        assert len(seen.tasks) == 1
        assert len(seen.tasks[0].history) == 1
        assert seen.tasks[0].comments == []

    async def test_committed_write_visible_after_lock_released(self, service, project):
        task = await service.create_task(
            project.project_id,
            "对账",
            "",
            datetime.now(UTC) + timedelta(days=1),
            TaskPriority.LOW,
        )

        writer = asyncio.create_task(service.add_comment(task.task_id, "z", "user-a"))
        reader = asyncio.create_task(service.get_task(task.task_id))
        await writer
        seen = await reader

        assert [c.content for c in seen.comments] == ["z"]
        assert len(seen.history) == 2

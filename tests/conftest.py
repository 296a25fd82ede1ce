"""全局 pytest 配置 -- 临时 SQLite 数据库 fixture"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from taskledger.core.models import Project, Task, TaskPriority
from taskledger.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from taskledger.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def store_group(tmp_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """提供共享同一连接的 Store 实例组"""
    sg = await create_store_group(str(tmp_db_path))
    yield sg
    await sg.close()


@pytest.fixture
def make_task():
    """构造新任务的工厂"""

    def _make(
        project_id: str,
        title: str = "写周报",
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> Task:
        return Task.create(
            title=title,
            description="",
            due_date=datetime.now(UTC) + timedelta(days=7),
            priority=priority,
            project_id=project_id,
        )

    return _make


@pytest_asyncio.fixture
async def project(store_group: StoreGroup) -> Project:
    """已持久化的空项目"""
    from taskledger.core.store import create_project

    p = Project.create("季度计划", "Q3 目标拆解", "user-owner")
    return await create_project(store_group.conn, store_group.project_store, p)

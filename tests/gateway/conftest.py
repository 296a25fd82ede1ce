"""gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskledger.core.store import create_store_group


@pytest_asyncio.fixture
async def test_app(tmp_path: Path):
    """创建测试用 app 实例，手动初始化 StoreGroup（绕过 lifespan）"""
    os.environ["TASKLEDGER_DB_PATH"] = str(tmp_path / "test.db")

    from taskledger.gateway.main import create_app

    app = create_app()
    store_group = await create_store_group(str(tmp_path / "test.db"))
    app.state.store_group = store_group

    yield app

    await store_group.close()
    os.environ.pop("TASKLEDGER_DB_PATH", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def project_id(client: AsyncClient) -> str:
    """通过 API 创建一个项目并返回 project_id"""
    resp = await client.post(
        "/api/projects",
        json={"name": "发布准备", "description": "v2 发布", "user_id": "owner"},
    )
    assert resp.status_code == 201
    return resp.json()["project_id"]

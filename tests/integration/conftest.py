"""集成测试共享 fixture"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.store import create_store_group
from betmanager.gateway.services.sse_hub import SSEHub
from httpx import ASGITransport, AsyncClient


async def _build_app(db_path: str):
    """按 lifespan 的方式组装 app（ASGITransport 不触发 lifespan）"""
    from betmanager.gateway.main import create_app

    app = create_app()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.sse_hub = SSEHub()
    dispatcher = await CommandDispatcher.load(store_group)
    dispatcher.add_listener(app.state.sse_hub.publish_entries)
    app.state.dispatcher = dispatcher
    return app


@pytest.fixture
def build_app():
    """app 工厂：同一数据库可多次组装，模拟进程重启"""
    return _build_app


@pytest_asyncio.fixture
async def integration_db_path(tmp_path: Path) -> str:
    db_path = str(tmp_path / "integration.db")
    os.environ["BETMANAGER_DB_PATH"] = db_path
    yield db_path
    os.environ.pop("BETMANAGER_DB_PATH", None)


@pytest_asyncio.fixture
async def integration_app(integration_db_path: str):
    """集成测试用 FastAPI app"""
    app = await _build_app(integration_db_path)
    yield app
    await app.state.store_group.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
        headers={"X-Actor-Name": "Operator"},
    ) as ac:
        yield ac

"""apps/gateway 测试配置 -- httpx AsyncClient + 手工初始化的 app.state"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.store import create_store_group
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app(tmp_path: Path):
    """创建测试用 FastAPI app 实例（绕过 lifespan，手工初始化 state）"""
    db_path = str(tmp_path / "sqlite" / "test.db")
    os.environ["BETMANAGER_DB_PATH"] = db_path

    from betmanager.gateway.main import create_app
    from betmanager.gateway.services.sse_hub import SSEHub

    application = create_app()
    store_group = await create_store_group(db_path)
    application.state.store_group = store_group
    application.state.sse_hub = SSEHub()
    dispatcher = await CommandDispatcher.load(store_group)
    dispatcher.add_listener(application.state.sse_hub.publish_entries)
    application.state.dispatcher = dispatcher

    yield application

    await store_group.close()
    os.environ.pop("BETMANAGER_DB_PATH", None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Actor-Name": "Ana"},
    ) as ac:
        yield ac

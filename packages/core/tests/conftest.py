"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.engine import TransitionEngine
from betmanager.core.models import StateSnapshot
from betmanager.core.store import StoreGroup, create_store_group


@pytest.fixture
def engine() -> TransitionEngine:
    return TransitionEngine()


@pytest.fixture
def empty_state() -> StateSnapshot:
    """出厂配置、无任何实体的快照"""
    return StateSnapshot()


@pytest_asyncio.fixture
async def core_db_path(tmp_path: Path) -> Path:
    """核心层临时数据库路径"""
    return tmp_path / "core_test.db"


@pytest_asyncio.fixture
async def store_group(core_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """核心层已初始化的 StoreGroup"""
    sg = await create_store_group(str(core_db_path))
    yield sg
    await sg.close()


@pytest_asyncio.fixture
async def dispatcher(store_group: StoreGroup) -> CommandDispatcher:
    return await CommandDispatcher.load(store_group)

"""依赖注入模块 -- 通过 FastAPI Depends 注入 dispatcher / Store 实例

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.store import StoreGroup
from fastapi import Header, Request


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_dispatcher(request: Request) -> CommandDispatcher:
    """从 app.state 获取 CommandDispatcher 实例"""
    return request.app.state.dispatcher


def get_sse_hub(request: Request):
    """从 app.state 获取 SSEHub 实例"""
    return request.app.state.sse_hub


def get_actor_name(x_actor_name: str | None = Header(default=None)) -> str | None:
    """审计操作者显示名（X-Actor-Name 请求头），缺省由 core 记为 System"""
    return x_actor_name

"""TraceMiddleware -- 实体级追踪

从 /api/tasks/{id}、/api/accounts/{id}、/api/packs/{id} 路径中提取实体 ID，
绑定到 structlog contextvars，贯穿该请求内的 core 日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# 路径段 -> contextvars 键
_ENTITY_SEGMENTS: dict[str, str] = {
    "tasks": "task_id",
    "accounts": "account_id",
    "packs": "pack_id",
}

# 不是实体 ID 的子路由
_RESERVED_SEGMENTS = frozenset({"reconcile"})


def extract_entity(path: str) -> tuple[str, str] | None:
    """从路径中提取 (contextvars 键, 实体 ID)"""
    parts = [p for p in path.split("/") if p]
    for i, part in enumerate(parts[:-1]):
        key = _ENTITY_SEGMENTS.get(part)
        if key is None:
            continue
        entity_id = parts[i + 1]
        if entity_id not in _RESERVED_SEGMENTS:
            return key, entity_id
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """实体级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        entity = extract_entity(request.url.path)
        if entity:
            key, entity_id = entity
            structlog.contextvars.bind_contextvars(**{key: entity_id})

        return await call_next(request)

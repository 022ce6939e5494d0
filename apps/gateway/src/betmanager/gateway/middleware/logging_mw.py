"""LoggingMiddleware -- 请求级日志

每个请求绑定 request_id（ULID）与审计操作者（X-Actor-Name，缺省 System），
core 层在同一请求内写出的 command_executed / state_persisted 等事件都带上这两个字段，
便于把一条审计日志追溯到具体 HTTP 请求。request_id 通过 X-Request-ID 响应头返回。

/health 与 /ready 探针只在 debug 级别记录，避免编排系统的轮询淹没操作日志。
"""

import time

import structlog
from betmanager.core.config import SYSTEM_ACTOR_NAME
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

ACTOR_HEADER = "x-actor-name"

_HEALTH_PATHS = frozenset({"/health", "/ready"})


def resolve_actor(header_value: str | None) -> str:
    """请求头中的操作者名；空白或缺省时为 System（与审计日志一致）"""
    if header_value and header_value.strip():
        return header_value.strip()
    return SYSTEM_ACTOR_NAME


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
            actor=resolve_actor(request.headers.get(ACTOR_HEADER)),
        )

        log = structlog.get_logger()
        emit = log.adebug if path in _HEALTH_PATHS else log.ainfo
        started = time.perf_counter()
        await emit("request_started")

        response = await call_next(request)

        await emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )

        response.headers["X-Request-ID"] = request_id
        return response

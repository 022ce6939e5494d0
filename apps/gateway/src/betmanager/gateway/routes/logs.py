"""审计日志路由

GET /api/logs?limit=&relatedId=   审计条目列表（最新在前）
GET /api/stream/logs?relatedId=   SSE 实时推送新写入的审计条目，15 秒心跳保活
"""

import asyncio
import json

from betmanager.core.config import SSE_HEARTBEAT_INTERVAL
from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.models import LogEntry
from betmanager.core.registry import AuditLog
from fastapi import APIRouter, Depends, Query
from sse_starlette.sse import EventSourceResponse

from ..deps import get_dispatcher, get_sse_hub
from ..responses import to_json
from ..services.sse_hub import ALL_LOGS_TOPIC

router = APIRouter()


def _entry_to_sse(entry: LogEntry) -> dict:
    """LogEntry -> SSE 消息"""
    return {
        "id": entry.id,
        "event": "log",
        "data": json.dumps(to_json(entry), ensure_ascii=False),
    }


@router.get("/api/logs")
async def list_logs(
    limit: int | None = Query(default=None, ge=1, description="最多返回条数"),
    related_id: str | None = Query(default=None, alias="relatedId", description="按关联实体筛选"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    audit_log = AuditLog(list(dispatcher.state.logs))
    entries = audit_log.for_entity(related_id) if related_id else audit_log.entries()
    if limit is not None:
        entries = entries[:limit]
    return {"logs": to_json(entries)}


@router.get("/api/stream/logs")
async def stream_logs(
    related_id: str | None = Query(default=None, alias="relatedId"),
    sse_hub=Depends(get_sse_hub),
):
    """SSE 审计条目流：只推送订阅之后写入的条目"""
    topic = related_id or ALL_LOGS_TOPIC
    queue = await sse_hub.subscribe(topic)

    async def event_generator():
        try:
            while True:
                try:
                    # 等待新条目（带心跳超时）
                    entry = await asyncio.wait_for(queue.get(), timeout=SSE_HEARTBEAT_INTERVAL)
                    yield _entry_to_sse(entry)
                except TimeoutError:
                    # 心跳保活
                    yield {"comment": "heartbeat"}
        finally:
            await sse_hub.unsubscribe(topic, queue)

    return EventSourceResponse(event_generator())

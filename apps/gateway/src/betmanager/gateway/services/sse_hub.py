"""SSEHub -- 内存中审计条目广播器

每个订阅者持有一个 asyncio.Queue，按 topic 订阅：
"logs" 接收全部新条目，related_id 作为 topic 只接收该实体的条目。
"""

import asyncio
from collections import defaultdict

from betmanager.core.models import LogEntry

# 全部条目的 topic
ALL_LOGS_TOPIC = "logs"


class SSEHub:
    """SSE 事件广播器 -- 基于 asyncio.Queue 的发布/订阅模式"""

    def __init__(self, queue_maxsize: int = 100) -> None:
        # topic -> set of asyncio.Queue
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)
        self._queue_maxsize = queue_maxsize

    async def subscribe(self, topic: str = ALL_LOGS_TOPIC) -> asyncio.Queue:
        """订阅指定 topic

        Args:
            topic: "logs" 或某个实体 ID

        Returns:
            asyncio.Queue 实例，新条目会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers[topic].add(queue)
        return queue

    async def unsubscribe(self, topic: str, queue: asyncio.Queue) -> None:
        self._subscribers[topic].discard(queue)
        if not self._subscribers[topic]:
            del self._subscribers[topic]

    def subscriber_count(self, topic: str = ALL_LOGS_TOPIC) -> int:
        return len(self._subscribers.get(topic, ()))

    async def broadcast(self, topic: str, entry: LogEntry) -> None:
        """向 topic 的所有订阅者推送条目；队列已满的订阅者被移除"""
        dead_queues = []
        for queue in self._subscribers.get(topic, set()):
            try:
                queue.put_nowait(entry)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 清理已满的队列
        for q in dead_queues:
            self._subscribers[topic].discard(q)
        if topic in self._subscribers and not self._subscribers[topic]:
            del self._subscribers[topic]

    async def publish_entries(self, entries: list[LogEntry]) -> None:
        """CommandDispatcher 监听入口：按写入顺序广播本次提交的条目"""
        for entry in entries:
            await self.broadcast(ALL_LOGS_TOPIC, entry)
            await self.broadcast(entry.related_id, entry)

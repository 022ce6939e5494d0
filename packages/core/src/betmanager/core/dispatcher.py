"""CommandDispatcher -- 单写者命令队列 + write-through 持久化

所有状态变更经由 dispatch() 串行执行：
1. TransitionEngine 在当前快照上执行命令（纯计算）
2. 变化的 bucket 在同一 SQLite 事务内写入
3. 提交成功后才切换内存快照，并通知监听者（如 SSE 广播）

命令产生的 follow-up（自动提现任务）在同一把锁内按 FIFO 逐条执行，
每条各自提交，位于产生它的命令之后。
"""

import asyncio
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from .engine import TransitionEngine
from .models import CommandResult, LogEntry, StateSnapshot
from .store import StoreGroup, changed_buckets, encode_buckets, persist_buckets

log = structlog.get_logger()

LogListener = Callable[[list[LogEntry]], Awaitable[None]]


class CommandDispatcher:
    """单写者命令调度器"""

    def __init__(
        self,
        store_group: StoreGroup,
        state: StateSnapshot | None = None,
        engine: TransitionEngine | None = None,
    ) -> None:
        self._stores = store_group
        self._state = state if state is not None else StateSnapshot()
        self._engine = engine or TransitionEngine()
        self._lock = asyncio.Lock()
        self._listeners: list[LogListener] = []

    @classmethod
    async def load(
        cls,
        store_group: StoreGroup,
        engine: TransitionEngine | None = None,
    ) -> "CommandDispatcher":
        """从持久化 bucket 恢复快照并创建 dispatcher"""
        state = await store_group.bucket_store.load_snapshot()
        return cls(store_group, state=state, engine=engine)

    @property
    def state(self) -> StateSnapshot:
        """当前已提交的快照（只读使用）"""
        return self._state

    def add_listener(self, listener: LogListener) -> None:
        """注册审计条目监听者，每次提交后以本次新增条目调用"""
        self._listeners.append(listener)

    async def dispatch(self, command: Any, actor_name: str | None = None) -> CommandResult:
        """执行命令及其 follow-up

        Args:
            command: 命令实例
            actor_name: 操作者显示名

        Returns:
            首条命令的执行结果（follow-up 的拒绝或持久化失败只记录日志）

        Raises:
            Exception: 首条命令持久化失败时回滚并抛出，内存快照保持不变
        """
        async with self._lock:
            first: CommandResult | None = None
            queue: deque[Any] = deque([command])
            while queue:
                current = queue.popleft()
                result = self._engine.execute(self._state, current, actor_name)
                if first is None:
                    first = result
                if not result.ok:
                    if current is not command:
                        log.warning(
                            "follow_up_rejected",
                            command=current.kind,
                            code=result.error.code,
                        )
                    continue

                if current is command:
                    await self._commit(result)
                else:
                    try:
                        await self._commit(result)
                    except Exception as e:
                        # 首条命令已提交，follow-up 持久化失败不再向调用方抛出
                        log.error(
                            "follow_up_failed",
                            command=current.kind,
                            error=str(e),
                        )
                        continue
                queue.extend(result.follow_ups)

        return first

    async def _commit(self, result: CommandResult) -> None:
        names = changed_buckets(self._state, result.state)
        payloads = encode_buckets(result.state, names)
        await persist_buckets(self._stores.conn, self._stores.bucket_store, payloads)
        self._state = result.state

        if result.logs:
            await self._notify(result.logs)

    async def _notify(self, entries: list[LogEntry]) -> None:
        for listener in self._listeners:
            try:
                await listener(entries)
            except Exception as e:
                # 监听者失败不影响已提交的状态
                log.warning("log_listener_failed", error=str(e))

"""命令执行结果

CommandResult 是 TransitionEngine 的唯一输出：成功时携带新快照、
本次写入的审计条目与待排队的后续命令；失败时携带 CommandError，快照保持原样。
"""

from typing import Any

from pydantic import BaseModel, Field

from .account import Account
from .base import CamelModel
from .log_entry import LogEntry
from .pack import Pack
from .snapshot import StateSnapshot
from .task import Task


class DeliveryOutcome(BaseModel):
    """TaskRegistry.apply_partial_delivery 的返回值"""

    remaining_quantity: int = Field(ge=0)
    fully_delivered: bool


class DeliveryReceipt(CamelModel):
    """FinishDelivery 的产出：新账号、更新后的任务与 pack"""

    task: Task
    accounts: list[Account]
    pack: Pack | None = None
    remaining_quantity: int
    fully_delivered: bool


class CommandError(BaseModel):
    """结构化失败信息"""

    code: str = Field(description="错误码，如 TASK_NOT_FOUND")
    message: str


class CommandResult(BaseModel):
    """命令执行结果"""

    ok: bool
    state: StateSnapshot
    logs: list[LogEntry] = Field(default_factory=list, description="本次新增的审计条目")
    follow_ups: list[Any] = Field(
        default_factory=list,
        description="需在同一串行队列上后续执行的命令",
    )
    payload: Any = Field(default=None, description="命令产出的主实体（如新建的 Task）")
    error: CommandError | None = None

    @classmethod
    def failure(cls, state: StateSnapshot, code: str, message: str) -> "CommandResult":
        """构建失败结果（快照原样返回，无审计条目）"""
        return cls(ok=False, state=state, error=CommandError(code=code, message=message))

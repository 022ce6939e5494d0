"""BetManager Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .account import PROTECTED_ACCOUNT_FIELDS, Account, AccountDraft
from .commands import (
    AddHouse,
    AddPixKey,
    AddTaskType,
    ChangeStatus,
    Command,
    CreatePack,
    CreateTask,
    DeleteTask,
    EditTask,
    FinishDelivery,
    LimitAccount,
    MarkReplacement,
    ReconcilePacks,
    RemoveHouse,
    RemovePixKey,
    RemoveTaskType,
    ResetSettings,
    SaveAccount,
)
from .enums import (
    TASK_STATUS_LABELS,
    VALID_ACCOUNT_TRANSITIONS,
    AccountStatus,
    PackStatus,
    PixKeyType,
    TaskStatus,
    validate_account_transition,
)
from .log_entry import LogEntry
from .pack import Pack
from .results import CommandError, CommandResult, DeliveryOutcome, DeliveryReceipt
from .settings import PixKey, TaskTypeOption
from .snapshot import BUCKET_FIELDS, StateSnapshot, default_task_types
from .task import Task, TaskDraft, TaskUpdate

__all__ = [
    # 枚举
    "TaskStatus",
    "AccountStatus",
    "PackStatus",
    "PixKeyType",
    "TASK_STATUS_LABELS",
    # 状态机
    "VALID_ACCOUNT_TRANSITIONS",
    "validate_account_transition",
    # 实体
    "Task",
    "TaskDraft",
    "TaskUpdate",
    "Account",
    "AccountDraft",
    "PROTECTED_ACCOUNT_FIELDS",
    "Pack",
    "LogEntry",
    "PixKey",
    "TaskTypeOption",
    # 快照
    "StateSnapshot",
    "BUCKET_FIELDS",
    "default_task_types",
    # 命令
    "Command",
    "CreateTask",
    "CreatePack",
    "ChangeStatus",
    "EditTask",
    "DeleteTask",
    "FinishDelivery",
    "LimitAccount",
    "MarkReplacement",
    "SaveAccount",
    "ReconcilePacks",
    "AddHouse",
    "RemoveHouse",
    "AddTaskType",
    "RemoveTaskType",
    "AddPixKey",
    "RemovePixKey",
    "ResetSettings",
    # 结果
    "CommandResult",
    "CommandError",
    "DeliveryOutcome",
    "DeliveryReceipt",
]

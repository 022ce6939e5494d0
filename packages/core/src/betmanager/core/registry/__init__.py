"""BetManager Core Registries -- 快照之上的实体集合操作

所有 registry 就地修改传入的集合；TransitionEngine 只把工作副本交给它们，
保证失败命令不会影响已提交的快照。
"""

from .account_registry import AccountRegistry
from .audit_log import AuditLog
from .pack_ledger import PackLedger
from .settings_registry import SettingsRegistry, task_type_value
from .task_registry import TaskRegistry

__all__ = [
    "AuditLog",
    "PackLedger",
    "AccountRegistry",
    "TaskRegistry",
    "SettingsRegistry",
    "task_type_value",
]

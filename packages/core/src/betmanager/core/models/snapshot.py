"""StateSnapshot -- 全部持久化集合的快照

每个字段对应一个命名 bucket；BUCKET_FIELDS 给出 bucket 名 -> 字段名映射。
集合约定按插入时间倒序（最新在前）。
"""

from pydantic import Field

from ..config import DEFAULT_HOUSES, DEFAULT_TASK_TYPES
from .account import Account
from .base import CamelModel
from .log_entry import LogEntry
from .pack import Pack
from .settings import PixKey, TaskTypeOption
from .task import Task


def default_task_types() -> list[TaskTypeOption]:
    """出厂 task types 列表"""
    return [
        TaskTypeOption(label=label, value=value)
        for value, label in DEFAULT_TASK_TYPES.items()
    ]


class StateSnapshot(CamelModel):
    """四类实体集合 + 配置集合"""

    tasks: list[Task] = Field(default_factory=list)
    logs: list[LogEntry] = Field(default_factory=list)
    accounts: list[Account] = Field(default_factory=list)
    packs: list[Pack] = Field(default_factory=list)
    houses: list[str] = Field(default_factory=lambda: list(DEFAULT_HOUSES))
    pix_keys: list[PixKey] = Field(default_factory=list)
    task_types: list[TaskTypeOption] = Field(default_factory=default_task_types)

    def type_label(self, type_value: str) -> str:
        """task type 的显示名，未配置时回退为原值"""
        for option in self.task_types:
            if option.value == type_value:
                return option.label
        return type_value


# bucket 名 -> StateSnapshot 字段名
BUCKET_FIELDS: dict[str, str] = {
    "tasks": "tasks",
    "logs": "logs",
    "accounts": "accounts",
    "packs": "packs",
    "houses": "houses",
    "pixKeys": "pix_keys",
    "taskTypes": "task_types",
}

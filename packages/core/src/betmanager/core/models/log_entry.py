"""LogEntry Domain Model

审计日志 append-only，条目不可变。
related_id 指向 task / account / pack，系统级事件使用 SYSTEM 哨兵。
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from .base import CamelModel


class LogEntry(CamelModel):
    """审计条目"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="唯一标识，ULID 格式")
    related_id: str = Field(description="关联实体 ID 或 SYSTEM")
    entity_label: str = Field(description="关联实体的简短描述")
    action: str = Field(description="动作描述")
    actor: str = Field(description="操作者显示名")
    timestamp: datetime = Field(description="时间戳")

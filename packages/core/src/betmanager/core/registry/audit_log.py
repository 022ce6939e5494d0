"""AuditLog -- append-only 审计日志

条目插入到列表头部，外部观察顺序始终为最新在前。
条目本身不可变（LogEntry frozen），也不提供删除。
"""

from datetime import UTC, datetime

from ..config import SYSTEM_ACTOR_NAME, SYSTEM_RELATED_ID
from ..ids import new_id
from ..models.log_entry import LogEntry


class AuditLog:
    """审计日志（就地操作传入的列表）"""

    def __init__(self, entries: list[LogEntry]) -> None:
        self._entries = entries

    def append(
        self,
        related_id: str | None,
        entity_label: str,
        action: str,
        actor_name: str | None = None,
    ) -> LogEntry:
        """追加一条审计条目

        Args:
            related_id: 关联的 task / account / pack ID，None 表示系统级事件
            entity_label: 关联实体的简短描述
            action: 动作描述
            actor_name: 操作者显示名，缺省为 "System"

        Returns:
            新写入的 LogEntry
        """
        entry = LogEntry(
            id=new_id(),
            related_id=related_id or SYSTEM_RELATED_ID,
            entity_label=entity_label,
            action=action,
            actor=(actor_name or "").strip() or SYSTEM_ACTOR_NAME,
            timestamp=datetime.now(UTC),
        )
        self._entries.insert(0, entry)
        return entry

    def entries(self) -> list[LogEntry]:
        """按时间戳倒序返回全部条目"""
        return sorted(self._entries, key=lambda e: e.timestamp, reverse=True)

    def for_entity(self, related_id: str) -> list[LogEntry]:
        """返回关联到指定实体的条目（最新在前）"""
        return [e for e in self.entries() if e.related_id == related_id]

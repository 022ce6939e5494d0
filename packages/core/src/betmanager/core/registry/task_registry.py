"""TaskRegistry -- 任务集合

删除为逻辑删除（status=DELETED），记录永久保留供审计。
部分交付按 quantity 扣减；quantity 缺省视为 1。超额交付同样视为交付完成。
"""

from datetime import UTC, datetime
from typing import Any

from ..config import DEFAULT_DELETION_REASON
from ..exceptions import InvalidInputError
from ..ids import new_id
from ..models.enums import TaskStatus
from ..models.results import DeliveryOutcome
from ..models.task import Task, TaskDraft


class TaskRegistry:
    """任务集合（就地操作传入的列表）"""

    def __init__(self, tasks: list[Task]) -> None:
        self._tasks = tasks

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def create(self, draft: TaskDraft) -> Task:
        """新建任务，状态由调用方给出

        Raises:
            InvalidInputError: house / type 为空，或 quantity 小于 1
        """
        if not draft.house or not draft.house.strip():
            raise InvalidInputError("Task house is required")
        if not draft.type or not draft.type.strip():
            raise InvalidInputError("Task type is required")
        if draft.quantity is not None and draft.quantity < 1:
            raise InvalidInputError(
                f"Task quantity must be at least 1, got {draft.quantity}"
            )

        now = datetime.now(UTC)
        task = Task(
            id=new_id(),
            type=draft.type.strip(),
            house=draft.house.strip(),
            account_name=draft.account_name,
            quantity=draft.quantity,
            description=draft.description,
            pix_key_info=draft.pix_key_info,
            status=draft.status,
            created_at=now,
            updated_at=now,
        )
        self._tasks.insert(0, task)
        return task

    def change_status(self, task_id: str, new_status: TaskStatus) -> TaskStatus | None:
        """变更状态

        Returns:
            变更前的状态；任务不存在时返回 None
        """
        task = self.get(task_id)
        if task is None:
            return None
        self._replace(task_id, {"status": new_status})
        return task.status

    def edit(self, task_id: str, updates: dict[str, Any]) -> tuple[Task, Task] | None:
        """合并字段并刷新 updated_at

        Returns:
            (编辑前, 编辑后)；任务不存在时返回 None

        Raises:
            InvalidInputError: quantity 为负，或 house / type 被置空
        """
        quantity = updates.get("quantity")
        if quantity is not None and quantity < 0:
            raise InvalidInputError(f"Task quantity must not be negative, got {quantity}")
        for field in ("house", "type"):
            if field in updates and not (updates[field] or "").strip():
                raise InvalidInputError(f"Task {field} must not be empty")

        old = self.get(task_id)
        if old is None:
            return None
        update = {k: v for k, v in updates.items() if k not in ("id", "status", "created_at")}
        new = self._replace(task_id, update)
        return old, new

    def mark_deleted(self, task_id: str, reason: str | None = None) -> Task | None:
        """逻辑删除：status=DELETED，记录删除原因（缺省 "not provided"）"""
        reason = (reason or "").strip() or DEFAULT_DELETION_REASON
        return self._replace(
            task_id,
            {"status": TaskStatus.DELETED, "deletion_reason": reason},
        )

    def apply_partial_delivery(
        self, task_id: str, delivered_count: int
    ) -> DeliveryOutcome | None:
        """从剩余数量中扣除本次交付数

        剩余 <= 0 时任务进入 FINALIZED（quantity 保持原值，不写负数）；
        否则写回正的剩余数量，状态不变。

        Returns:
            DeliveryOutcome；任务不存在时返回 None
        """
        task = self.get(task_id)
        if task is None:
            return None

        requested = task.quantity or 1
        remaining = requested - delivered_count
        if remaining <= 0:
            self._replace(task_id, {"status": TaskStatus.FINALIZED})
            return DeliveryOutcome(remaining_quantity=0, fully_delivered=True)

        self._replace(task_id, {"quantity": remaining})
        return DeliveryOutcome(remaining_quantity=remaining, fully_delivered=False)

    def _replace(self, task_id: str, update: dict[str, Any]) -> Task | None:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                updated = task.model_copy(
                    update={**update, "updated_at": datetime.now(UTC)}
                )
                self._tasks[idx] = updated
                return updated
        return None

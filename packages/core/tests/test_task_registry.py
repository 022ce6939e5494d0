"""TaskRegistry 单元测试

测试内容：
1. create 输入校验
2. 逻辑删除与默认原因
3. 部分交付 / 超额交付
"""

import pytest
from betmanager.core.exceptions import InvalidInputError
from betmanager.core.models import Task, TaskDraft, TaskStatus
from betmanager.core.registry import TaskRegistry


@pytest.fixture
def tasks() -> list[Task]:
    return []


@pytest.fixture
def registry(tasks: list[Task]) -> TaskRegistry:
    return TaskRegistry(tasks)


def _draft(**overrides) -> TaskDraft:
    data = {"type": "CONTA_NOVA", "house": "Bet365"}
    data.update(overrides)
    return TaskDraft(**data)


class TestTaskCreate:
    def test_assigns_id_and_timestamps(self, registry: TaskRegistry, tasks: list[Task]):
        task = registry.create(_draft(quantity=3))
        assert len(task.id) == 26
        assert task.created_at == task.updated_at
        assert task.status == TaskStatus.PENDING
        assert tasks == [task]

    def test_caller_decides_status(self, registry: TaskRegistry):
        task = registry.create(_draft(status=TaskStatus.REQUESTED))
        assert task.status == TaskStatus.REQUESTED

    @pytest.mark.parametrize("field", ["house", "type"])
    def test_rejects_blank_required_field(self, registry: TaskRegistry, tasks, field):
        with pytest.raises(InvalidInputError):
            registry.create(_draft(**{field: " "}))
        assert tasks == []

    def test_rejects_zero_quantity(self, registry: TaskRegistry):
        with pytest.raises(InvalidInputError):
            registry.create(_draft(quantity=0))


class TestTaskMutations:
    def test_change_status_returns_old(self, registry: TaskRegistry):
        task = registry.create(_draft())
        old = registry.change_status(task.id, TaskStatus.REQUESTED)
        assert old == TaskStatus.PENDING
        assert registry.get(task.id).status == TaskStatus.REQUESTED

    def test_change_status_missing_is_noop(self, registry: TaskRegistry):
        assert registry.change_status("missing", TaskStatus.REQUESTED) is None

    def test_edit_merges_fields_and_protects_status(self, registry: TaskRegistry):
        task = registry.create(_draft(description="old"))
        old, new = registry.edit(
            task.id, {"description": "new", "status": TaskStatus.DELETED, "id": "x"}
        )
        assert old.description == "old"
        assert new.description == "new"
        assert new.status == TaskStatus.PENDING
        assert new.id == task.id
        assert new.updated_at >= old.updated_at

    def test_edit_rejects_negative_quantity(self, registry: TaskRegistry):
        task = registry.create(_draft())
        with pytest.raises(InvalidInputError):
            registry.edit(task.id, {"quantity": -1})

    def test_mark_deleted_keeps_record(self, registry: TaskRegistry, tasks: list[Task]):
        task = registry.create(_draft())
        deleted = registry.mark_deleted(task.id, "duplicate")
        assert deleted.status == TaskStatus.DELETED
        assert deleted.deletion_reason == "duplicate"
        assert len(tasks) == 1

    @pytest.mark.parametrize("reason", [None, "", "  "])
    def test_mark_deleted_default_reason(self, registry: TaskRegistry, reason):
        task = registry.create(_draft())
        assert registry.mark_deleted(task.id, reason).deletion_reason == "not provided"


class TestPartialDelivery:
    def test_partial_keeps_status(self, registry: TaskRegistry):
        task = registry.create(_draft(quantity=5))
        outcome = registry.apply_partial_delivery(task.id, 2)
        assert outcome.remaining_quantity == 3
        assert outcome.fully_delivered is False
        updated = registry.get(task.id)
        assert updated.quantity == 3
        assert updated.status == TaskStatus.PENDING

    def test_remainder_finalizes(self, registry: TaskRegistry):
        task = registry.create(_draft(quantity=5))
        registry.apply_partial_delivery(task.id, 2)
        outcome = registry.apply_partial_delivery(task.id, 3)
        assert outcome.fully_delivered is True
        assert registry.get(task.id).status == TaskStatus.FINALIZED

    def test_absent_quantity_counts_as_one(self, registry: TaskRegistry):
        task = registry.create(_draft(type="SAQUE"))
        outcome = registry.apply_partial_delivery(task.id, 1)
        assert outcome.fully_delivered is True

    def test_over_delivery_finalizes_without_negative_quantity(self, registry: TaskRegistry):
        task = registry.create(_draft(quantity=2))
        outcome = registry.apply_partial_delivery(task.id, 5)
        assert outcome.fully_delivered is True
        assert outcome.remaining_quantity == 0
        updated = registry.get(task.id)
        assert updated.status == TaskStatus.FINALIZED
        assert updated.quantity == 2

    def test_missing_task(self, registry: TaskRegistry):
        assert registry.apply_partial_delivery("missing", 1) is None

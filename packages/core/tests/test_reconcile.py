"""Pack 对账测试"""

from datetime import UTC, datetime

from betmanager.core.models import (
    Account,
    AccountStatus,
    Pack,
    PackStatus,
    ReconcilePacks,
    StateSnapshot,
)
from betmanager.core.reconcile import count_attributed


def _account(account_id: str, pack_id: str | None, status=AccountStatus.ACTIVE) -> Account:
    return Account(
        id=account_id,
        name=account_id,
        house="KTO",
        status=status,
        pack_id=pack_id,
        created_at=datetime.now(UTC),
    )


def _pack(pack_id: str, quantity: int, delivered: int, status=PackStatus.ACTIVE) -> Pack:
    now = datetime.now(UTC)
    return Pack(
        id=pack_id,
        house="KTO",
        quantity=quantity,
        delivered=delivered,
        status=status,
        created_at=now,
        updated_at=now,
    )


class TestCountAttributed:
    def test_replacement_not_counted(self):
        counts = count_attributed(
            [
                _account("a1", "p1"),
                _account("a2", "p1", AccountStatus.LIMITED),
                _account("a3", "p1", AccountStatus.REPLACEMENT),
                _account("a4", None),
            ]
        )
        assert counts == {"p1": 2}


class TestReconcilePacks:
    def test_drifted_pack_is_recounted(self, engine):
        state = StateSnapshot(
            packs=[_pack("p1", 3, 3, PackStatus.COMPLETED), _pack("p2", 2, 1)],
            accounts=[
                _account("a1", "p1"),
                _account("a2", "p1", AccountStatus.REPLACEMENT),
                _account("a3", "p2"),
            ],
        )
        result = engine.execute(state, ReconcilePacks(), "Ana")
        assert result.ok
        (changed,) = result.payload
        assert changed.id == "p1"
        assert changed.delivered == 1
        assert changed.status == PackStatus.ACTIVE
        assert result.logs[0].entity_label == "Pack KTO"
        assert result.logs[0].action == "Delivered count reconciled: 3 → 1"

    def test_status_only_inconsistency_fixed(self, engine):
        state = StateSnapshot(
            packs=[_pack("p1", 1, 1, PackStatus.ACTIVE)],
            accounts=[_account("a1", "p1")],
        )
        result = engine.execute(state, ReconcilePacks())
        assert result.state.packs[0].status == PackStatus.COMPLETED
        assert result.logs[0].action == "Delivered count reconciled: 1 → 1"

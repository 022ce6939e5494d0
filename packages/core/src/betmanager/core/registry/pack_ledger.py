"""PackLedger -- pack 交付进度账本

delivered 只按归属账号数增减，下限为 0；交付与对账后重算 status，
替换回退则无条件回到 ACTIVE。
引用不存在的 pack 时静默忽略（容忍手工编辑数据后留下的过期引用）。
pack 一经创建永不删除。
"""

import math
from datetime import UTC, datetime

import structlog

from ..exceptions import InvalidInputError
from ..ids import new_id
from ..models.enums import PackStatus
from ..models.pack import Pack

log = structlog.get_logger()


def _status_for(delivered: int, quantity: int) -> PackStatus:
    return PackStatus.COMPLETED if delivered >= quantity else PackStatus.ACTIVE


class PackLedger:
    """Pack 账本（就地操作传入的列表）"""

    def __init__(self, packs: list[Pack]) -> None:
        self._packs = packs

    def get(self, pack_id: str) -> Pack | None:
        for pack in self._packs:
            if pack.id == pack_id:
                return pack
        return None

    def create(self, house: str, quantity: int, price: float) -> Pack:
        """新建 ACTIVE pack，delivered = 0

        Raises:
            InvalidInputError: house 为空、quantity 非正整数或 price 为负数/非有限值
        """
        if not house or not house.strip():
            raise InvalidInputError("Pack house is required")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidInputError(f"Pack quantity must be a positive integer, got {quantity!r}")
        if not math.isfinite(price) or price < 0:
            raise InvalidInputError(f"Pack price must be a finite non-negative number, got {price!r}")

        now = datetime.now(UTC)
        pack = Pack(
            id=new_id(),
            house=house.strip(),
            quantity=quantity,
            delivered=0,
            price=price,
            status=PackStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        self._packs.insert(0, pack)
        return pack

    def apply_delivery(self, pack_id: str, delta: int) -> Pack | None:
        """按 delta 调整 delivered（下限 0）并重算状态

        Args:
            pack_id: pack ID
            delta: 正数为交付，负数为替换回退

        Returns:
            更新后的 Pack；pack 不存在时返回 None 且不做任何变更
        """
        return self._update(pack_id, lambda pack: pack.delivered + delta)

    def reverse_one(self, pack_id: str) -> Pack | None:
        """替换回退：delivered - 1（下限 0），status 无条件回到 ACTIVE

        超额交付的 pack 回退后仍可能 delivered >= quantity，此时同样重新打开。
        """
        return self._update(pack_id, lambda pack: pack.delivered - 1, status=PackStatus.ACTIVE)

    def recount(self, pack_id: str, delivered: int) -> Pack | None:
        """直接设定 delivered（对账用）并重算状态"""
        return self._update(pack_id, lambda _pack: delivered)

    def _update(self, pack_id: str, compute, status: PackStatus | None = None) -> Pack | None:
        for idx, pack in enumerate(self._packs):
            if pack.id != pack_id:
                continue
            delivered = max(0, compute(pack))
            updated = pack.model_copy(
                update={
                    "delivered": delivered,
                    "status": status or _status_for(delivered, pack.quantity),
                    "updated_at": datetime.now(UTC),
                }
            )
            self._packs[idx] = updated
            return updated

        log.info("pack_reference_stale", pack_id=pack_id)
        return None

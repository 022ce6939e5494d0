"""Pack 对账模块

pack.delivered 是账号归属的物化计数：应等于归属到该 pack 且未标记 REPLACEMENT 的账号数。
手工改数据或过期引用可能让两者偏离，此处按账号集合重算。
"""

from collections import Counter

import structlog

from .models.account import Account
from .models.enums import AccountStatus, PackStatus
from .models.pack import Pack
from .registry.pack_ledger import PackLedger

log = structlog.get_logger()


def count_attributed(accounts: list[Account]) -> Counter[str]:
    """统计每个 pack 的有效归属账号数（REPLACEMENT 不计入）

    Args:
        accounts: 全部账号

    Returns:
        pack_id -> 账号数
    """
    return Counter(
        account.pack_id
        for account in accounts
        if account.pack_id and account.status != AccountStatus.REPLACEMENT
    )


def reconcile_packs(
    ledger: PackLedger,
    packs: list[Pack],
    accounts: list[Account],
) -> list[tuple[Pack, int]]:
    """重算所有 pack 的 delivered（就地修改 ledger）

    Args:
        ledger: 工作副本上的 PackLedger
        packs: 重算前的 pack 列表
        accounts: 全部账号

    Returns:
        [(重算后的 Pack, 重算前的 delivered)]，仅包含发生变化的 pack
    """
    counts = count_attributed(accounts)
    changed: list[tuple[Pack, int]] = []
    for pack in list(packs):
        expected = counts.get(pack.id, 0)
        expected_status = (
            PackStatus.COMPLETED if expected >= pack.quantity else PackStatus.ACTIVE
        )
        if expected == pack.delivered and expected_status == pack.status:
            continue
        updated = ledger.recount(pack.id, expected)
        if updated is not None:
            changed.append((updated, pack.delivered))

    log.info(
        "packs_reconciled",
        pack_count=len(packs),
        changed_count=len(changed),
    )
    return changed

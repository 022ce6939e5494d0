"""CLI 入口模块 -- python -m betmanager.core <command>

支持的命令：
  show-state       打印各 bucket 的条目数与最后更新时间
  reconcile-packs  按账号归属重算所有 pack 的 delivered
"""

import asyncio
import sys

from .config import get_db_path

_USAGE = """用法: python -m betmanager.core <command>
命令:
  show-state       打印各 bucket 的条目数与最后更新时间
  reconcile-packs  按账号归属重算所有 pack 的 delivered"""


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print(_USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "show-state":
        asyncio.run(show_state())
    elif command == "reconcile-packs":
        asyncio.run(reconcile_packs())
    else:
        print(f"未知命令: {command}")
        print("可用命令: show-state, reconcile-packs")
        sys.exit(1)


async def show_state() -> None:
    """打印 bucket 概况"""
    from .models import BUCKET_FIELDS
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        persisted = dict(await store_group.bucket_store.list_buckets())
        state = await store_group.bucket_store.load_snapshot()
        for name, field in BUCKET_FIELDS.items():
            updated_at = persisted.get(name, "(default)")
            print(f"  {name:<10} {len(getattr(state, field)):>6}  {updated_at}")
    finally:
        await store_group.close()


async def reconcile_packs() -> None:
    """经由 dispatcher 执行 ReconcilePacks"""
    from .dispatcher import CommandDispatcher
    from .models import ReconcilePacks
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        dispatcher = await CommandDispatcher.load(store_group)
        result = await dispatcher.dispatch(ReconcilePacks())
        for pack in result.payload:
            print(f"  {pack.id} {pack.house}: delivered={pack.delivered} ({pack.status})")
        print(f"对账完成，修正 {len(result.payload)} 个 pack")
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()

"""多 bucket 原子写入

一次命令改动的全部 bucket 在同一 SQLite 事务内提交；
任何一个写入失败都整体回滚，调用方据此决定是否切换内存状态。
"""

import aiosqlite
import structlog

from .protocols import BucketStore

log = structlog.get_logger()


async def persist_buckets(
    conn: aiosqlite.Connection,
    store: BucketStore,
    payloads: dict[str, str],
) -> None:
    """在同一事务内写入多个 bucket

    Args:
        conn: 数据库连接（需与 store 使用同一连接以保证事务性）
        store: BucketStore 实例
        payloads: bucket 名 -> JSON 文本

    Raises:
        Exception: 如果事务提交失败，自动回滚后重新抛出
    """
    if not payloads:
        return
    try:
        for name, payload in payloads.items():
            await store.save_bucket(name, payload)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise

    log.info("state_persisted", buckets=sorted(payloads))

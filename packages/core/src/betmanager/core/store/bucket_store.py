"""BucketStore SQLite 实现

每个 bucket 保存一个集合的 camelCase JSON 文本（与 HTTP 表示一致）。
缺失的 bucket 读取为空集合；houses / taskTypes 缺失时回退为出厂配置。
"""

from datetime import UTC, datetime
from typing import Any

import aiosqlite
import structlog
from pydantic import TypeAdapter

from ..models.snapshot import BUCKET_FIELDS, StateSnapshot

log = structlog.get_logger()

# bucket 名 -> 对应集合类型的 TypeAdapter
_ADAPTERS: dict[str, TypeAdapter] = {
    name: TypeAdapter(StateSnapshot.model_fields[field].annotation)
    for name, field in BUCKET_FIELDS.items()
}


def encode_bucket(name: str, value: Any) -> str:
    """集合 -> JSON 文本（camelCase）"""
    return _ADAPTERS[name].dump_json(value, by_alias=True).decode("utf-8")


def decode_bucket(name: str, payload: str) -> Any:
    """JSON 文本 -> 集合"""
    return _ADAPTERS[name].validate_json(payload)


def encode_buckets(state: StateSnapshot, names: list[str]) -> dict[str, str]:
    """编码快照中的指定 bucket"""
    return {name: encode_bucket(name, getattr(state, BUCKET_FIELDS[name])) for name in names}


def changed_buckets(old: StateSnapshot, new: StateSnapshot) -> list[str]:
    """比较两份快照，返回内容发生变化的 bucket 名"""
    return [
        name
        for name, field in BUCKET_FIELDS.items()
        if getattr(old, field) != getattr(new, field)
    ]


class SqliteBucketStore:
    """BucketStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def load_bucket(self, name: str) -> str | None:
        cursor = await self._conn.execute(
            "SELECT payload FROM buckets WHERE name = ?",
            (name,),
        )
        row = await cursor.fetchone()
        return row[0] if row else None

    async def save_bucket(self, name: str, payload: str) -> None:
        """写入 bucket（UPSERT）

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            """
            INSERT INTO buckets (name, payload, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(name) DO UPDATE SET
                payload = excluded.payload,
                updated_at = excluded.updated_at
            """,
            (name, payload, datetime.now(UTC).isoformat()),
        )

    async def list_buckets(self) -> list[tuple[str, str]]:
        cursor = await self._conn.execute(
            "SELECT name, updated_at FROM buckets ORDER BY name ASC"
        )
        rows = await cursor.fetchall()
        return [(row[0], row[1]) for row in rows]

    async def load_snapshot(self) -> StateSnapshot:
        """读取全部 bucket；缺失字段走 StateSnapshot 的默认值"""
        data: dict[str, Any] = {}
        for name, field in BUCKET_FIELDS.items():
            payload = await self.load_bucket(name)
            if payload is None:
                continue
            data[field] = decode_bucket(name, payload)

        log.info("state_loaded", buckets=sorted(data))
        return StateSnapshot(**data)

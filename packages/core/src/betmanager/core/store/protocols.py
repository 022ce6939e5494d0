"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing），
dispatcher 只依赖此接口，测试可替换为任意实现。
"""

from typing import Protocol

from ..models.snapshot import StateSnapshot


class BucketStore(Protocol):
    """命名 bucket 存储接口

    写入方法不自动提交事务，由调用方管理。
    """

    async def load_bucket(self, name: str) -> str | None:
        """读取 bucket 的 JSON 文本，不存在时返回 None"""
        ...

    async def save_bucket(self, name: str, payload: str) -> None:
        """写入（覆盖）bucket"""
        ...

    async def list_buckets(self) -> list[tuple[str, str]]:
        """已持久化的 bucket 列表：[(name, updated_at)]"""
        ...

    async def load_snapshot(self) -> StateSnapshot:
        """读取全部 bucket 并组装为快照"""
        ...

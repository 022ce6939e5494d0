"""Pack Domain Model

一次采购的账号批次。status == COMPLETED 当且仅当最近一次重算时 delivered >= quantity。
"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .enums import PackStatus


class Pack(CamelModel):
    """Pack 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    house: str = Field(description="博彩平台名称")
    quantity: int = Field(gt=0, description="采购数量")
    delivered: int = Field(default=0, ge=0, description="已交付数量")
    price: float = Field(default=0.0, ge=0, description="批次价格")
    status: PackStatus = Field(default=PackStatus.ACTIVE, description="交付状态")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")

    @property
    def progress_percent(self) -> int:
        """交付进度百分比，封顶 100"""
        return min(100, round(self.delivered / self.quantity * 100))

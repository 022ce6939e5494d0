"""Task Domain Model

Task 永不物理删除：删除是一次到 DELETED 的状态流转，并记录 deletion_reason。
quantity 表示仍欠交付的数量；缺省视为单件任务。
"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .enums import TaskStatus


class Task(CamelModel):
    """Task 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    type: str = Field(description="任务类型，取值来自可配置的 task types")
    house: str = Field(description="博彩平台名称")
    account_name: str | None = Field(default=None, description="关联账号名")
    quantity: int | None = Field(default=None, ge=0, description="剩余待交付数量")
    description: str | None = Field(default=None, description="自由文本描述")
    pix_key_info: str | None = Field(default=None, description="收款 Pix 信息")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="当前状态")
    deletion_reason: str | None = Field(default=None, description="删除原因")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")


class TaskDraft(CamelModel):
    """创建 Task 的输入（无 id / 时间戳）"""

    type: str
    house: str
    account_name: str | None = None
    quantity: int | None = None
    description: str | None = None
    pix_key_info: str | None = None
    status: TaskStatus = TaskStatus.PENDING


class TaskUpdate(CamelModel):
    """编辑 Task 的部分字段，仅合并显式给出的字段

    status 不可编辑，只能通过状态变更 / 删除 / 交付命令改变。
    """

    type: str | None = None
    house: str | None = None
    account_name: str | None = None
    quantity: int | None = None
    description: str | None = None
    pix_key_info: str | None = None

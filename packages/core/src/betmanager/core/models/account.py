"""Account Domain Model

账号由手工登记或 CONTA_NOVA 类任务交付产生。
若 pack_id 存在，该账号在生命周期内恰好计入该 pack 的 delivered 一次。
"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .enums import AccountStatus


class Account(CamelModel):
    """Account 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(description="账号名")
    email: str = Field(default="", description="账号邮箱")
    password: str | None = Field(default=None, description="账号密码（明文，非安全存储）")
    card: str | None = Field(default=None, description="绑定卡信息")
    house: str = Field(description="博彩平台名称")
    deposit_value: float = Field(default=0.0, ge=0, description="入金金额")
    status: AccountStatus = Field(default=AccountStatus.ACTIVE, description="生命周期状态")
    owner: str | None = Field(default=None, description="负责人")
    tags: list[str] = Field(default_factory=list, description="自由标签")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime | None = Field(default=None, description="最后手工编辑时间")
    task_id_source: str | None = Field(default=None, description="来源任务 ID")
    pack_id: str | None = Field(default=None, description="归属 pack ID")


class AccountDraft(CamelModel):
    """账号登记输入

    id 存在时表示编辑已有账号（SaveAccount 语义），否则新建。
    house 在任务交付时由任务决定，可省略。
    """

    id: str | None = None
    name: str
    email: str = ""
    password: str | None = None
    card: str | None = None
    house: str | None = None
    deposit_value: float = Field(default=0.0, ge=0)
    owner: str | None = None
    tags: list[str] = Field(default_factory=list)


# 编辑时不允许覆盖的字段：状态与归属只能经由命令改变
PROTECTED_ACCOUNT_FIELDS: frozenset[str] = frozenset(
    {"id", "status", "created_at", "task_id_source", "pack_id"}
)

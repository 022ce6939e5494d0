"""Command 子类型 -- TransitionEngine 的全部输入

每个命令带 kind 判别字段，Command 为判别联合类型，便于从 JSON 反序列化。
"""

from typing import Annotated, Literal

from pydantic import Field

from .account import AccountDraft
from .base import CamelModel
from .enums import PixKeyType, TaskStatus
from .task import TaskDraft, TaskUpdate


class CreateTask(TaskDraft):
    """新建任务"""

    kind: Literal["create_task"] = "create_task"


class CreatePack(CamelModel):
    """新建 pack"""

    kind: Literal["create_pack"] = "create_pack"
    house: str
    quantity: int
    price: float = 0.0


class ChangeStatus(CamelModel):
    """变更任务状态"""

    kind: Literal["change_status"] = "change_status"
    task_id: str
    new_status: TaskStatus


class EditTask(CamelModel):
    """编辑任务字段"""

    kind: Literal["edit_task"] = "edit_task"
    task_id: str
    updates: TaskUpdate


class DeleteTask(CamelModel):
    """逻辑删除任务"""

    kind: Literal["delete_task"] = "delete_task"
    task_id: str
    reason: str | None = None


class FinishDelivery(CamelModel):
    """交付账号（可部分交付），可选从 pack 扣减"""

    kind: Literal["finish_delivery"] = "finish_delivery"
    task_id: str
    accounts: list[AccountDraft]
    pack_id: str | None = None


class LimitAccount(CamelModel):
    """标记账号为 LIMITED，可选生成提现任务"""

    kind: Literal["limit_account"] = "limit_account"
    account_id: str
    create_withdrawal: bool = False
    pix_info: str | None = None


class MarkReplacement(CamelModel):
    """标记账号为 REPLACEMENT，回退 pack 进度，可选生成提现任务"""

    kind: Literal["mark_replacement"] = "mark_replacement"
    account_id: str
    create_withdrawal: bool = False
    pix_info: str | None = None


class SaveAccount(CamelModel):
    """手工登记（account.id 为空）或编辑（account.id 存在）账号"""

    kind: Literal["save_account"] = "save_account"
    account: AccountDraft
    pack_id: str | None = None


class ReconcilePacks(CamelModel):
    """按归属账号重算全部 pack 的 delivered"""

    kind: Literal["reconcile_packs"] = "reconcile_packs"


class AddHouse(CamelModel):
    kind: Literal["add_house"] = "add_house"
    name: str


class RemoveHouse(CamelModel):
    kind: Literal["remove_house"] = "remove_house"
    name: str


class AddTaskType(CamelModel):
    kind: Literal["add_task_type"] = "add_task_type"
    label: str


class RemoveTaskType(CamelModel):
    kind: Literal["remove_task_type"] = "remove_task_type"
    value: str


class AddPixKey(CamelModel):
    kind: Literal["add_pix_key"] = "add_pix_key"
    name: str
    bank: str
    key_type: PixKeyType
    key: str


class RemovePixKey(CamelModel):
    kind: Literal["remove_pix_key"] = "remove_pix_key"
    pix_key_id: str


class ResetSettings(CamelModel):
    """恢复出厂 houses / task types（Pix 键保留）"""

    kind: Literal["reset_settings"] = "reset_settings"


Command = Annotated[
    CreateTask
    | CreatePack
    | ChangeStatus
    | EditTask
    | DeleteTask
    | FinishDelivery
    | LimitAccount
    | MarkReplacement
    | SaveAccount
    | ReconcilePacks
    | AddHouse
    | RemoveHouse
    | AddTaskType
    | RemoveTaskType
    | AddPixKey
    | RemovePixKey
    | ResetSettings,
    Field(discriminator="kind"),
]

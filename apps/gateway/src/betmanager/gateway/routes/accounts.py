"""账号路由

GET  /api/accounts                           账号列表，支持 status / house 筛选
POST /api/accounts                           手工登记账号（可归属 pack）
PUT  /api/accounts/{account_id}              编辑账号数据（状态与归属不可改）
POST /api/accounts/{account_id}/limit        标记 LIMITED，可选生成提现任务
POST /api/accounts/{account_id}/replacement  标记 REPLACEMENT，回退 pack 进度
"""

from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.models import (
    AccountDraft,
    AccountStatus,
    LimitAccount,
    MarkReplacement,
    SaveAccount,
)
from betmanager.core.models.base import CamelModel
from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_actor_name, get_dispatcher
from ..responses import command_response, to_json

router = APIRouter()


class AccountCreateRequest(AccountDraft):
    """手工登记请求体"""

    pack_id: str | None = None


class AccountActionRequest(CamelModel):
    """限制 / 替换请求体"""

    create_withdrawal: bool = False
    pix_info: str | None = None


@router.get("/api/accounts")
async def list_accounts(
    status: AccountStatus | None = Query(default=None, description="按状态筛选"),
    house: str | None = Query(default=None, description="按平台筛选"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    accounts = dispatcher.state.accounts
    if status is not None:
        accounts = [a for a in accounts if a.status == status]
    if house:
        accounts = [a for a in accounts if a.house == house]
    return {"accounts": to_json(accounts)}


@router.post("/api/accounts")
async def create_account(
    body: AccountCreateRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """手工登记账号；id 字段被忽略"""
    draft = AccountDraft(**body.model_dump(exclude={"id", "pack_id"}))
    result = await dispatcher.dispatch(SaveAccount(account=draft, pack_id=body.pack_id), actor_name)
    return command_response(result, "account", status_code=201)


@router.put("/api/accounts/{account_id}")
async def update_account(
    account_id: str,
    draft: AccountDraft,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """编辑账号数据（路径中的 id 优先于请求体）"""
    draft = draft.model_copy(update={"id": account_id})
    result = await dispatcher.dispatch(SaveAccount(account=draft), actor_name)
    return command_response(result, "account")


@router.post("/api/accounts/{account_id}/limit")
async def limit_account(
    account_id: str,
    body: AccountActionRequest | None = Body(default=None),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    body = body or AccountActionRequest()
    command = LimitAccount(
        account_id=account_id,
        create_withdrawal=body.create_withdrawal,
        pix_info=body.pix_info,
    )
    result = await dispatcher.dispatch(command, actor_name)
    return command_response(result, "account")


@router.post("/api/accounts/{account_id}/replacement")
async def mark_replacement(
    account_id: str,
    body: AccountActionRequest | None = Body(default=None),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    body = body or AccountActionRequest()
    command = MarkReplacement(
        account_id=account_id,
        create_withdrawal=body.create_withdrawal,
        pix_info=body.pix_info,
    )
    result = await dispatcher.dispatch(command, actor_name)
    return command_response(result, "account")

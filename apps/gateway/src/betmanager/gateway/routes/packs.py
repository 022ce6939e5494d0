"""Pack 路由

GET  /api/packs            pack 列表，支持 status 筛选
GET  /api/packs/{pack_id}  pack 详情，含归属账号与进度百分比
POST /api/packs            新建 pack
POST /api/packs/reconcile  按归属账号重算 delivered
"""

from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.models import CreatePack, PackStatus, ReconcilePacks
from betmanager.core.models.base import CamelModel
from betmanager.core.registry import AccountRegistry
from fastapi import APIRouter, Depends, Query

from ..deps import get_actor_name, get_dispatcher
from ..responses import command_response, error_response, to_json

router = APIRouter()


class PackCreateRequest(CamelModel):
    """新建 pack 请求体"""

    house: str
    quantity: int
    price: float = 0.0


@router.get("/api/packs")
async def list_packs(
    status: PackStatus | None = Query(default=None, description="按状态筛选"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    packs = dispatcher.state.packs
    if status is not None:
        packs = [p for p in packs if p.status == status]
    return {"packs": to_json(packs)}


@router.get("/api/packs/{pack_id}")
async def get_pack_detail(
    pack_id: str,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    state = dispatcher.state
    pack = next((p for p in state.packs if p.id == pack_id), None)
    if pack is None:
        return error_response("PACK_NOT_FOUND", f"Pack with id {pack_id} does not exist")

    accounts = AccountRegistry(list(state.accounts)).for_pack(pack_id)
    return {
        "pack": to_json(pack),
        "accounts": to_json(accounts),
        "progressPercent": pack.progress_percent,
    }


@router.post("/api/packs")
async def create_pack(
    body: PackCreateRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    command = CreatePack(house=body.house, quantity=body.quantity, price=body.price)
    result = await dispatcher.dispatch(command, actor_name)
    return command_response(result, "pack", status_code=201)


@router.post("/api/packs/reconcile")
async def reconcile_packs(
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """返回被修正的 pack 列表"""
    result = await dispatcher.dispatch(ReconcilePacks(), actor_name)
    return command_response(result, "packs")

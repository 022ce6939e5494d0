"""配置路由 -- houses / task types / Pix 键

GET    /api/settings                     当前配置
POST   /api/settings/houses              新增 house
DELETE /api/settings/houses              移除 house（?name=）
POST   /api/settings/task-types          新增 task type（value 由 label 生成）
DELETE /api/settings/task-types          移除 task type（?value=）
POST   /api/settings/pix-keys            新增 Pix 键
DELETE /api/settings/pix-keys/{pix_key_id}  移除 Pix 键
POST   /api/settings/reset               恢复出厂 houses / task types

变更成功后统一返回完整配置。
"""

from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.models import (
    AddHouse,
    AddPixKey,
    AddTaskType,
    CommandResult,
    PixKeyType,
    RemoveHouse,
    RemovePixKey,
    RemoveTaskType,
    ResetSettings,
    StateSnapshot,
)
from betmanager.core.models.base import CamelModel
from fastapi import APIRouter, Depends, Query

from ..deps import get_actor_name, get_dispatcher
from ..responses import error_response, to_json

router = APIRouter()


class HouseRequest(CamelModel):
    name: str


class TaskTypeRequest(CamelModel):
    label: str


class PixKeyRequest(CamelModel):
    name: str
    bank: str
    key_type: PixKeyType
    key: str


def _settings_body(state: StateSnapshot) -> dict:
    return {
        "houses": list(state.houses),
        "taskTypes": to_json(state.task_types),
        "pixKeys": to_json(state.pix_keys),
    }


def _settings_response(result: CommandResult, dispatcher: CommandDispatcher):
    if not result.ok:
        return error_response(result.error.code, result.error.message)
    return _settings_body(dispatcher.state)


@router.get("/api/settings")
async def get_settings(dispatcher: CommandDispatcher = Depends(get_dispatcher)):
    return _settings_body(dispatcher.state)


@router.post("/api/settings/houses")
async def add_house(
    body: HouseRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    result = await dispatcher.dispatch(AddHouse(name=body.name), actor_name)
    return _settings_response(result, dispatcher)


@router.delete("/api/settings/houses")
async def remove_house(
    name: str = Query(description="house 名称"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    result = await dispatcher.dispatch(RemoveHouse(name=name), actor_name)
    return _settings_response(result, dispatcher)


@router.post("/api/settings/task-types")
async def add_task_type(
    body: TaskTypeRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    result = await dispatcher.dispatch(AddTaskType(label=body.label), actor_name)
    return _settings_response(result, dispatcher)


@router.delete("/api/settings/task-types")
async def remove_task_type(
    value: str = Query(description="task type 存储值"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    result = await dispatcher.dispatch(RemoveTaskType(value=value), actor_name)
    return _settings_response(result, dispatcher)


@router.post("/api/settings/pix-keys")
async def add_pix_key(
    body: PixKeyRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    command = AddPixKey(name=body.name, bank=body.bank, key_type=body.key_type, key=body.key)
    result = await dispatcher.dispatch(command, actor_name)
    return _settings_response(result, dispatcher)


@router.delete("/api/settings/pix-keys/{pix_key_id}")
async def remove_pix_key(
    pix_key_id: str,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    result = await dispatcher.dispatch(RemovePixKey(pix_key_id=pix_key_id), actor_name)
    return _settings_response(result, dispatcher)


@router.post("/api/settings/reset")
async def reset_settings(
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    result = await dispatcher.dispatch(ResetSettings(), actor_name)
    return _settings_response(result, dispatcher)

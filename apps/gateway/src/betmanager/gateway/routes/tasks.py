"""任务路由

GET   /api/tasks                  任务列表，支持 status 筛选（最新在前）
GET   /api/tasks/{task_id}        任务详情，含关联审计条目
POST  /api/tasks                  新建任务（type 必须是已配置的 task type）
PATCH /api/tasks/{task_id}        编辑字段
POST  /api/tasks/{task_id}/status    变更状态
POST  /api/tasks/{task_id}/delete    逻辑删除
POST  /api/tasks/{task_id}/delivery  交付账号（可部分交付）
"""

from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.models import (
    AccountDraft,
    ChangeStatus,
    CreateTask,
    DeleteTask,
    EditTask,
    FinishDelivery,
    TaskDraft,
    TaskStatus,
    TaskUpdate,
)
from betmanager.core.models.base import CamelModel
from betmanager.core.registry import AuditLog
from fastapi import APIRouter, Body, Depends, Query

from ..deps import get_actor_name, get_dispatcher
from ..responses import command_response, error_response, to_json

router = APIRouter()


class StatusChangeRequest(CamelModel):
    """状态变更请求体"""

    status: TaskStatus


class DeleteRequest(CamelModel):
    """删除请求体，reason 可省略"""

    reason: str | None = None


class DeliveryRequest(CamelModel):
    """交付请求体"""

    accounts: list[AccountDraft]
    pack_id: str | None = None


@router.get("/api/tasks")
async def list_tasks(
    status: TaskStatus | None = Query(default=None, description="按状态筛选"),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    """查询任务列表，按 created_at 倒序"""
    tasks = dispatcher.state.tasks
    if status is not None:
        tasks = [t for t in tasks if t.status == status]
    tasks = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return {"tasks": to_json(tasks)}


@router.get("/api/tasks/{task_id}")
async def get_task_detail(
    task_id: str,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
):
    """查询任务详情，包含关联的审计条目"""
    state = dispatcher.state
    task = next((t for t in state.tasks if t.id == task_id), None)
    if task is None:
        return error_response("TASK_NOT_FOUND", f"Task with id {task_id} does not exist")

    logs = AuditLog(list(state.logs)).for_entity(task_id)
    return {"task": to_json(task), "logs": to_json(logs)}


@router.post("/api/tasks")
async def create_task(
    draft: TaskDraft,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """新建任务"""
    allowed = {option.value for option in dispatcher.state.task_types}
    if draft.type not in allowed:
        return error_response("INVALID_TASK_TYPE", f"Unknown task type: {draft.type}")

    command = CreateTask(**draft.model_dump())
    result = await dispatcher.dispatch(command, actor_name)
    return command_response(result, "task", status_code=201)


@router.patch("/api/tasks/{task_id}")
async def edit_task(
    task_id: str,
    updates: TaskUpdate,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """编辑任务字段（只合并请求体中显式给出的字段）"""
    result = await dispatcher.dispatch(EditTask(task_id=task_id, updates=updates), actor_name)
    return command_response(result, "task")


@router.post("/api/tasks/{task_id}/status")
async def change_status(
    task_id: str,
    body: StatusChangeRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """变更任务状态"""
    command = ChangeStatus(task_id=task_id, new_status=body.status)
    result = await dispatcher.dispatch(command, actor_name)
    return command_response(result, "task")


@router.post("/api/tasks/{task_id}/delete")
async def delete_task(
    task_id: str,
    body: DeleteRequest | None = Body(default=None),
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """逻辑删除任务（记录保留，status=DELETED）"""
    reason = body.reason if body is not None else None
    result = await dispatcher.dispatch(DeleteTask(task_id=task_id, reason=reason), actor_name)
    return command_response(result, "task")


@router.post("/api/tasks/{task_id}/delivery")
async def finish_delivery(
    task_id: str,
    body: DeliveryRequest,
    dispatcher: CommandDispatcher = Depends(get_dispatcher),
    actor_name: str | None = Depends(get_actor_name),
):
    """交付账号：创建账号、扣减 pack、更新任务剩余数量"""
    command = FinishDelivery(task_id=task_id, accounts=body.accounts, pack_id=body.pack_id)
    result = await dispatcher.dispatch(command, actor_name)
    return command_response(result, None)

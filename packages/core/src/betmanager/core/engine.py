"""TransitionEngine -- task / account / pack 状态流转编排

execute() 是纯函数：旧快照 + 命令 -> CommandResult。
engine 只在工作副本上调用 registry；命令失败时返回原快照，且不产生任何审计条目。

工作副本只复制集合容器：registry 通过 model_copy 替换元素而不是就地修改元素，
因此旧快照中的实体对象不会被触碰。

需要再发起命令的场景（限制 / 替换账号时生成提现任务）不在 engine 内递归执行，
而是放入 CommandResult.follow_ups，由 CommandDispatcher 在同一串行队列上排队。
"""

from collections.abc import Callable
from typing import Any

import structlog

from .config import WITHDRAWAL_TASK_TYPE
from .exceptions import BetManagerError, InvalidInputError, InvalidTransitionError, NotFoundError
from .models import (
    TASK_STATUS_LABELS,
    Account,
    AccountStatus,
    AddHouse,
    AddPixKey,
    AddTaskType,
    ChangeStatus,
    CommandResult,
    CreatePack,
    CreateTask,
    DeleteTask,
    DeliveryReceipt,
    EditTask,
    FinishDelivery,
    LimitAccount,
    LogEntry,
    MarkReplacement,
    ReconcilePacks,
    RemoveHouse,
    RemovePixKey,
    RemoveTaskType,
    ResetSettings,
    SaveAccount,
    StateSnapshot,
    Task,
    TaskStatus,
    validate_account_transition,
)
from .models.snapshot import BUCKET_FIELDS
from .reconcile import reconcile_packs
from .registry import AccountRegistry, AuditLog, PackLedger, SettingsRegistry, TaskRegistry

log = structlog.get_logger()


def working_copy(state: StateSnapshot) -> StateSnapshot:
    """复制快照的全部集合容器（元素共享）"""
    return state.model_copy(
        update={field: list(getattr(state, field)) for field in BUCKET_FIELDS.values()}
    )


class _CommandContext:
    """单条命令的执行上下文：工作副本 + 其上的 registry"""

    def __init__(self, state: StateSnapshot, actor_name: str | None) -> None:
        self.state = state
        self.actor_name = actor_name
        self.tasks = TaskRegistry(state.tasks)
        self.accounts = AccountRegistry(state.accounts)
        self.packs = PackLedger(state.packs)
        self.settings = SettingsRegistry(state)
        self.audit_log = AuditLog(state.logs)
        self.new_logs: list[LogEntry] = []
        self.follow_ups: list[Any] = []

    def audit(self, related_id: str | None, entity_label: str, action: str) -> None:
        entry = self.audit_log.append(related_id, entity_label, action, self.actor_name)
        self.new_logs.append(entry)

    def require_task(self, task_id: str) -> Task:
        task = self.tasks.get(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task

    def require_account(self, account_id: str) -> Account:
        account = self.accounts.get(account_id)
        if account is None:
            raise NotFoundError("account", account_id)
        return account

    def task_label(self, task: Task) -> str:
        return f"{self.state.type_label(task.type)} - {task.house}"


class TransitionEngine:
    """命令 -> 新快照 + 审计条目"""

    def __init__(self) -> None:
        self._handlers: dict[type, Callable[[_CommandContext, Any], Any]] = {
            CreateTask: self._create_task,
            CreatePack: self._create_pack,
            ChangeStatus: self._change_status,
            EditTask: self._edit_task,
            DeleteTask: self._delete_task,
            FinishDelivery: self._finish_delivery,
            LimitAccount: self._limit_account,
            MarkReplacement: self._mark_replacement,
            SaveAccount: self._save_account,
            ReconcilePacks: self._reconcile_packs,
            AddHouse: self._add_house,
            RemoveHouse: self._remove_house,
            AddTaskType: self._add_task_type,
            RemoveTaskType: self._remove_task_type,
            AddPixKey: self._add_pix_key,
            RemovePixKey: self._remove_pix_key,
            ResetSettings: self._reset_settings,
        }

    def execute(
        self,
        state: StateSnapshot,
        command: Any,
        actor_name: str | None = None,
    ) -> CommandResult:
        """执行单条命令

        Args:
            state: 当前快照（不会被修改）
            command: 命令实例
            actor_name: 操作者显示名，None 时审计记为 "System"

        Returns:
            成功时携带新快照；失败时携带 CommandError 与原快照

        Raises:
            TypeError: 未知命令类型（调用方编程错误）
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

        ctx = _CommandContext(working_copy(state), actor_name)
        try:
            payload = handler(ctx, command)
        except BetManagerError as e:
            log.info(
                "command_rejected",
                command=command.kind,
                code=e.code,
                reason=e.message,
            )
            return CommandResult.failure(state, e.code, e.message)

        log.info(
            "command_executed",
            command=command.kind,
            log_count=len(ctx.new_logs),
            follow_up_count=len(ctx.follow_ups),
        )
        return CommandResult(
            ok=True,
            state=ctx.state,
            logs=ctx.new_logs,
            follow_ups=ctx.follow_ups,
            payload=payload,
        )

    # ---- tasks ----

    def _create_task(self, ctx: _CommandContext, command: CreateTask) -> Task:
        task = ctx.tasks.create(command)
        ctx.audit(
            task.id,
            ctx.task_label(task),
            f"Task created ({TASK_STATUS_LABELS[task.status]})",
        )
        return task

    def _change_status(self, ctx: _CommandContext, command: ChangeStatus) -> Task:
        task = ctx.require_task(command.task_id)
        old_status = ctx.tasks.change_status(task.id, command.new_status)
        ctx.audit(
            task.id,
            ctx.task_label(task),
            f"Status changed: {TASK_STATUS_LABELS[old_status]} → "
            f"{TASK_STATUS_LABELS[command.new_status]}",
        )
        return ctx.tasks.get(task.id)

    def _edit_task(self, ctx: _CommandContext, command: EditTask) -> Task:
        ctx.require_task(command.task_id)
        updates = command.updates.model_dump(exclude_unset=True)
        old, new = ctx.tasks.edit(command.task_id, updates)
        if (new.pix_key_info or "").strip() and new.pix_key_info != old.pix_key_info:
            ctx.audit(new.id, f"Edit - {old.house}", "Pix key updated")
        return new

    def _delete_task(self, ctx: _CommandContext, command: DeleteTask) -> Task:
        task = ctx.require_task(command.task_id)
        deleted = ctx.tasks.mark_deleted(task.id, command.reason)
        ctx.audit(
            task.id,
            ctx.task_label(task),
            f"Request deleted. Reason: {deleted.deletion_reason}",
        )
        return deleted

    def _finish_delivery(
        self, ctx: _CommandContext, command: FinishDelivery
    ) -> DeliveryReceipt:
        task = ctx.require_task(command.task_id)
        if not command.accounts:
            raise InvalidInputError("At least one account is required to finish a delivery")

        # 顺序固定：账号 -> pack -> 任务数量
        accounts = ctx.accounts.create_from_delivery(task, command.accounts, command.pack_id)
        delivered = len(accounts)
        pack = None
        if command.pack_id:
            pack = ctx.packs.apply_delivery(command.pack_id, delivered)
        outcome = ctx.tasks.apply_partial_delivery(task.id, delivered)

        deducted = "Yes" if command.pack_id else "No"
        if outcome.fully_delivered:
            ctx.audit(
                task.id,
                f"Delivery finished - {task.house}",
                f"Task completed. {delivered} accounts delivered. Pack deducted: {deducted}",
            )
        else:
            ctx.audit(
                task.id,
                f"Partial delivery - {task.house}",
                f"Delivered: {delivered}. Remaining: {outcome.remaining_quantity}. "
                f"Pack deducted: {deducted}",
            )
        return DeliveryReceipt(
            task=ctx.tasks.get(task.id),
            accounts=accounts,
            pack=pack,
            remaining_quantity=outcome.remaining_quantity,
            fully_delivered=outcome.fully_delivered,
        )

    # ---- packs ----

    def _create_pack(self, ctx: _CommandContext, command: CreatePack):
        pack = ctx.packs.create(command.house, command.quantity, command.price)
        ctx.audit(pack.id, f"Pack {pack.house}", f"New pack created: {pack.quantity} accounts")
        return pack

    def _reconcile_packs(self, ctx: _CommandContext, command: ReconcilePacks):
        changed = reconcile_packs(ctx.packs, list(ctx.state.packs), ctx.state.accounts)
        for pack, before in changed:
            ctx.audit(
                pack.id,
                f"Pack {pack.house}",
                f"Delivered count reconciled: {before} → {pack.delivered}",
            )
        return [pack for pack, _ in changed]

    # ---- accounts ----

    def _limit_account(self, ctx: _CommandContext, command: LimitAccount) -> Account:
        account = ctx.require_account(command.account_id)
        self._check_transition(account, AccountStatus.LIMITED)

        updated = ctx.accounts.update_status(account.id, AccountStatus.LIMITED)
        if command.create_withdrawal:
            ctx.follow_ups.append(
                self._withdrawal_task(
                    account,
                    "Automatically generated when limiting account.",
                    command.pix_info,
                )
            )
        ctx.audit(account.id, f"Account {account.name}", "Account marked as LIMITED")
        return updated

    def _mark_replacement(self, ctx: _CommandContext, command: MarkReplacement) -> Account:
        account = ctx.require_account(command.account_id)
        self._check_transition(account, AccountStatus.REPLACEMENT)

        # 账号退出 pack，释放一个名额，pack 重新打开
        if account.pack_id:
            ctx.packs.reverse_one(account.pack_id)
        updated = ctx.accounts.update_status(account.id, AccountStatus.REPLACEMENT)
        if command.create_withdrawal:
            ctx.follow_ups.append(
                self._withdrawal_task(
                    account,
                    "Automatically generated (account for replacement).",
                    command.pix_info,
                )
            )
        ctx.audit(account.id, f"Account {account.name}", "Marked for REPLACEMENT")
        return updated

    def _save_account(self, ctx: _CommandContext, command: SaveAccount) -> Account:
        draft = command.account
        if draft.id:
            ctx.require_account(draft.id)
            updates = draft.model_dump(exclude_unset=True, exclude={"id"})
            if updates.get("house") is None:
                updates.pop("house", None)
            edited = ctx.accounts.edit(draft.id, updates)
            ctx.audit(edited.id, f"Account {edited.name}", "Account data updated manually")
            return edited

        account = ctx.accounts.create_manual(draft, command.pack_id)
        if command.pack_id:
            ctx.packs.apply_delivery(command.pack_id, 1)
        ctx.audit(account.id, f"Account {account.name}", "Account manually registered")
        return account

    @staticmethod
    def _check_transition(account: Account, to_status: AccountStatus) -> None:
        if not validate_account_transition(account.status, to_status):
            raise InvalidTransitionError(
                f"Cannot transition account {account.id} from {account.status} to {to_status}"
            )

    @staticmethod
    def _withdrawal_task(account: Account, description: str, pix_info: str | None) -> CreateTask:
        return CreateTask(
            type=WITHDRAWAL_TASK_TYPE,
            house=account.house,
            account_name=account.name,
            description=description,
            pix_key_info=pix_info,
            status=TaskStatus.PENDING,
        )

    # ---- settings ----

    def _add_house(self, ctx: _CommandContext, command: AddHouse) -> str:
        name = ctx.settings.add_house(command.name)
        ctx.audit(None, "Settings: Houses", f"Added house: {name}")
        return name

    def _remove_house(self, ctx: _CommandContext, command: RemoveHouse) -> str:
        name = ctx.settings.remove_house(command.name)
        ctx.audit(None, "Settings: Houses", f"Removed house: {name}")
        return name

    def _add_task_type(self, ctx: _CommandContext, command: AddTaskType):
        option = ctx.settings.add_task_type(command.label)
        ctx.audit(None, "Settings: Task types", f"Added task type: {option.label}")
        return option

    def _remove_task_type(self, ctx: _CommandContext, command: RemoveTaskType):
        option = ctx.settings.remove_task_type(command.value)
        ctx.audit(None, "Settings: Task types", f"Removed task type: {option.label}")
        return option

    def _add_pix_key(self, ctx: _CommandContext, command: AddPixKey):
        pix_key = ctx.settings.add_pix_key(
            command.name, command.bank, command.key_type, command.key
        )
        ctx.audit(None, "Settings: Pix", f"Added Pix key: {pix_key.name} ({pix_key.bank})")
        return pix_key

    def _remove_pix_key(self, ctx: _CommandContext, command: RemovePixKey):
        pix_key = ctx.settings.remove_pix_key(command.pix_key_id)
        ctx.audit(None, "Settings: Pix", f"Removed Pix key: {pix_key.name}")
        return pix_key

    def _reset_settings(self, ctx: _CommandContext, command: ResetSettings) -> None:
        ctx.settings.reset()
        ctx.audit(None, "Settings", "Settings reset to defaults")

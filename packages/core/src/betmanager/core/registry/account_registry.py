"""AccountRegistry -- 账号集合

只负责账号本身的增改；pack 进度联动由 TransitionEngine 负责。
引用不存在的账号时返回 None（no-op），由 engine 在调用前校验存在性。
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from ..exceptions import InvalidInputError
from ..ids import new_id
from ..models.account import PROTECTED_ACCOUNT_FIELDS, Account, AccountDraft
from ..models.enums import AccountStatus
from ..models.task import Task


class AccountRegistry:
    """账号集合（就地操作传入的列表）"""

    def __init__(self, accounts: list[Account]) -> None:
        self._accounts = accounts

    def get(self, account_id: str) -> Account | None:
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    def for_pack(self, pack_id: str) -> list[Account]:
        """归属到指定 pack 的全部账号"""
        return [a for a in self._accounts if a.pack_id == pack_id]

    def create_from_delivery(
        self,
        task: Task,
        drafts: Iterable[AccountDraft],
        pack_id: str | None = None,
    ) -> list[Account]:
        """为任务交付批量创建 ACTIVE 账号

        house 取自任务，task_id_source 指向任务；新账号按输入顺序插入到列表头部。
        """
        now = datetime.now(UTC)
        created = [
            self._build(draft, house=task.house, now=now, task_id=task.id, pack_id=pack_id)
            for draft in drafts
        ]
        self._accounts[0:0] = created
        return created

    def create_manual(self, draft: AccountDraft, pack_id: str | None = None) -> Account:
        """手工登记单个 ACTIVE 账号

        Raises:
            InvalidInputError: 未提供 house
        """
        if not draft.house or not draft.house.strip():
            raise InvalidInputError("Account house is required")
        account = self._build(
            draft,
            house=draft.house.strip(),
            now=datetime.now(UTC),
            task_id=None,
            pack_id=pack_id,
        )
        self._accounts.insert(0, account)
        return account

    def update_status(self, account_id: str, new_status: AccountStatus) -> Account | None:
        """纯状态变更，不联动 pack"""
        return self._replace(account_id, {"status": new_status})

    def edit(self, account_id: str, updates: dict[str, Any]) -> Account | None:
        """合并字段并刷新 updated_at；状态与归属字段被忽略

        Raises:
            InvalidInputError: name / house 被置空
        """
        merged = {k: v for k, v in updates.items() if k not in PROTECTED_ACCOUNT_FIELDS}
        for field in ("name", "house"):
            if field in merged and not (merged[field] or "").strip():
                raise InvalidInputError(f"Account {field} must not be empty")
        merged["updated_at"] = datetime.now(UTC)
        return self._replace(account_id, merged)

    def _replace(self, account_id: str, update: dict[str, Any]) -> Account | None:
        for idx, account in enumerate(self._accounts):
            if account.id == account_id:
                updated = account.model_copy(update=update)
                self._accounts[idx] = updated
                return updated
        return None

    @staticmethod
    def _build(
        draft: AccountDraft,
        house: str,
        now: datetime,
        task_id: str | None,
        pack_id: str | None,
    ) -> Account:
        if not draft.name or not draft.name.strip():
            raise InvalidInputError("Account name is required")
        return Account(
            id=new_id(),
            name=draft.name.strip(),
            email=draft.email,
            password=draft.password,
            card=draft.card,
            house=house,
            deposit_value=draft.deposit_value,
            status=AccountStatus.ACTIVE,
            owner=draft.owner,
            tags=list(draft.tags),
            created_at=now,
            task_id_source=task_id,
            pack_id=pack_id,
        )

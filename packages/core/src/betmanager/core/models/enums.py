"""枚举定义

包含 TaskStatus、AccountStatus、PackStatus、PixKeyType 枚举，
以及账号状态机 VALID_ACCOUNT_TRANSITIONS 合法流转映射。
Task type 不是枚举：它是运行时可扩展的配置集合（见 TaskTypeOption）。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 状态"""

    PENDING = "PENDING"
    REQUESTED = "REQUESTED"
    FINALIZED = "FINALIZED"
    DELETED = "DELETED"


TASK_STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.REQUESTED: "Requested",
    TaskStatus.FINALIZED: "Finalized",
    TaskStatus.DELETED: "Deleted",
}


class AccountStatus(StrEnum):
    """Account 生命周期状态"""

    ACTIVE = "ACTIVE"
    LIMITED = "LIMITED"
    # 终态：账号退役，不物理删除
    REPLACEMENT = "REPLACEMENT"


# 账号合法状态流转
VALID_ACCOUNT_TRANSITIONS: dict[AccountStatus, set[AccountStatus]] = {
    AccountStatus.ACTIVE: {AccountStatus.LIMITED, AccountStatus.REPLACEMENT},
    AccountStatus.LIMITED: {AccountStatus.REPLACEMENT},
    # 终态不可再流转（保证 pack 回退只发生一次）
    AccountStatus.REPLACEMENT: set(),
}


class PackStatus(StrEnum):
    """Pack 交付状态"""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class PixKeyType(StrEnum):
    """Pix 收款键类型"""

    CPF = "CPF"
    CNPJ = "CNPJ"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    RANDOM = "RANDOM"


def validate_account_transition(
    from_status: AccountStatus, to_status: AccountStatus
) -> bool:
    """验证账号状态流转是否合法

    Args:
        from_status: 当前状态
        to_status: 目标状态

    Returns:
        True 如果流转合法，否则 False
    """
    allowed = VALID_ACCOUNT_TRANSITIONS.get(from_status, set())
    return to_status in allowed

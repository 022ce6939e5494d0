"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、SSE 心跳间隔、审计默认值，以及 houses / task types 的出厂配置。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("BETMANAGER_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "BETMANAGER_DB_PATH",
        str(_get_base_dir() / "sqlite" / "betmanager.db"),
    )


# SSE 心跳间隔（秒）
SSE_HEARTBEAT_INTERVAL: int = int(
    os.environ.get("BETMANAGER_SSE_HEARTBEAT_INTERVAL", "15")
)

# 无登录用户时的审计操作者名称
SYSTEM_ACTOR_NAME: str = "System"

# 系统级审计条目的关联 ID 哨兵值
SYSTEM_RELATED_ID: str = "SYSTEM"

# 删除任务未给出原因时写入的默认值
DEFAULT_DELETION_REASON: str = "not provided"

# 限制/替换账号时自动生成的提现任务类型
WITHDRAWAL_TASK_TYPE: str = "SAQUE"

# 出厂 houses 列表
DEFAULT_HOUSES: list[str] = [
    "Bet365",
    "Betano",
    "Sportingbet",
    "KTO",
    "Pixbet",
    "Novibet",
]

# 出厂 task types（value -> label）
DEFAULT_TASK_TYPES: dict[str, str] = {
    "SMS": "SMS",
    "FACIAL_SEMANAL": "Weekly facial check",
    "REMOVER_2FA": "Remove 2FA",
    "DEPOSITO": "Deposit",
    "SAQUE": "Withdrawal",
    "ENVIO_SALDO": "Balance transfer",
    "CONTA_NOVA": "New account",
    "OUTRO": "Other",
}

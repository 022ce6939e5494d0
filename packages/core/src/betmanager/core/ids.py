"""ID 生成器

所有实体 ID 使用 ULID：时间有序，80 bit 随机部分，跨会话唯一。
"""

from ulid import ULID


def new_id() -> str:
    """生成新的实体 ID（ULID 字符串）"""
    return str(ULID())

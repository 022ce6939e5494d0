"""配置数据模型 -- houses / task types / Pix 键

配置集合运行时可增删，engine 把 type / house 当作不透明字符串处理。
"""

from pydantic import Field

from .base import CamelModel
from .enums import PixKeyType


class TaskTypeOption(CamelModel):
    """可选任务类型 {label, value}"""

    label: str = Field(description="显示名")
    value: str = Field(description="存储值，如 CONTA_NOVA")


class PixKey(CamelModel):
    """Pix 收款键"""

    id: str = Field(description="唯一标识")
    name: str = Field(description="持有人或标识名")
    bank: str = Field(description="银行")
    key_type: PixKeyType = Field(description="键类型")
    key: str = Field(description="键值")

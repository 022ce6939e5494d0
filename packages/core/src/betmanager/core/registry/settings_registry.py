"""SettingsRegistry -- houses / task types / Pix 键配置

配置集合是开放的字符串集合，运行时可增删；engine 把它们当作不透明值。
"""

import re

from ..config import DEFAULT_HOUSES
from ..exceptions import InvalidInputError, NotFoundError
from ..ids import new_id
from ..models.enums import PixKeyType
from ..models.settings import PixKey, TaskTypeOption
from ..models.snapshot import StateSnapshot, default_task_types

_WHITESPACE = re.compile(r"\s+")


def task_type_value(label: str) -> str:
    """由显示名生成存储值：大写，空白替换为下划线"""
    return _WHITESPACE.sub("_", label.strip().upper())


def _required(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidInputError(f"{field} is required")
    return value


class SettingsRegistry:
    """配置集合（就地操作快照的配置字段）"""

    def __init__(self, state: StateSnapshot) -> None:
        self._state = state

    def add_house(self, name: str) -> str:
        name = _required(name, "House name")
        if name in self._state.houses:
            raise InvalidInputError(f"House already exists: {name}")
        self._state.houses.append(name)
        return name

    def remove_house(self, name: str) -> str:
        if name not in self._state.houses:
            raise NotFoundError("setting", name)
        self._state.houses.remove(name)
        return name

    def add_task_type(self, label: str) -> TaskTypeOption:
        label = _required(label, "Task type label")
        value = task_type_value(label)
        if any(option.value == value for option in self._state.task_types):
            raise InvalidInputError(f"Task type already exists: {value}")
        option = TaskTypeOption(label=label, value=value)
        self._state.task_types.append(option)
        return option

    def remove_task_type(self, value: str) -> TaskTypeOption:
        for idx, option in enumerate(self._state.task_types):
            if option.value == value:
                return self._state.task_types.pop(idx)
        raise NotFoundError("setting", value)

    def add_pix_key(self, name: str, bank: str, key_type: PixKeyType, key: str) -> PixKey:
        pix_key = PixKey(
            id=new_id(),
            name=_required(name, "Pix key holder name"),
            bank=_required(bank, "Pix key bank"),
            key_type=key_type,
            key=_required(key, "Pix key"),
        )
        self._state.pix_keys.append(pix_key)
        return pix_key

    def remove_pix_key(self, pix_key_id: str) -> PixKey:
        for idx, pix_key in enumerate(self._state.pix_keys):
            if pix_key.id == pix_key_id:
                return self._state.pix_keys.pop(idx)
        raise NotFoundError("setting", pix_key_id)

    def reset(self) -> None:
        """恢复出厂 houses / task types，Pix 键保留"""
        self._state.houses = list(DEFAULT_HOUSES)
        self._state.task_types = default_task_types()

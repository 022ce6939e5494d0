"""Core 异常体系

Registry 抛出，TransitionEngine 捕获并转换为结构化失败结果（CommandError）。
code 字段直接用作 HTTP 错误体中的 error.code。
"""


class BetManagerError(Exception):
    """Core 基础异常"""

    code: str = "BETMANAGER_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        """
        Args:
            message: 错误描述
            code: 错误码，缺省使用类属性 code
        """
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NotFoundError(BetManagerError):
    """引用的 task / account / pack / 配置项不存在"""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: str) -> None:
        """
        Args:
            entity: 实体类型，如 "task"、"account"
            entity_id: 不存在的 ID
        """
        super().__init__(
            f"{entity.capitalize()} with id {entity_id} does not exist",
            code=f"{entity.upper()}_NOT_FOUND",
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidInputError(BetManagerError):
    """输入不合法（非正数量、空必填字段等），在任何 registry 变更之前拒绝"""

    code = "INVALID_INPUT"


class InvalidTransitionError(BetManagerError):
    """状态流转不合法（如对已 REPLACEMENT 的账号再次标记）"""

    code = "INVALID_TRANSITION"

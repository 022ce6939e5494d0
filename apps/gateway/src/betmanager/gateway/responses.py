"""响应构建 -- CommandResult / 领域对象 -> JSONResponse

错误体统一为 {"error": {"code": ..., "message": ...}}。
"""

from typing import Any

from betmanager.core.models import CommandResult
from pydantic_core import to_jsonable_python
from starlette.responses import JSONResponse

# 错误码 -> HTTP 状态码（*_NOT_FOUND 统一 404）
_STATUS_BY_CODE: dict[str, int] = {
    "INVALID_INPUT": 400,
    "INVALID_TRANSITION": 409,
    "INVALID_TASK_TYPE": 422,
}


def status_for(code: str) -> int:
    if code.endswith("_NOT_FOUND"):
        return 404
    return _STATUS_BY_CODE.get(code, 400)


def to_json(value: Any) -> Any:
    """领域对象 -> camelCase JSON 兼容结构"""
    return to_jsonable_python(value, by_alias=True)


def error_response(code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(code),
        content={"error": {"code": code, "message": message}},
    )


def command_response(
    result: CommandResult,
    key: str | None,
    status_code: int = 200,
) -> JSONResponse:
    """命令结果 -> 响应

    Args:
        result: dispatcher 返回的结果
        key: 成功时 payload 放在此键下；None 表示 payload 直接作为响应体
        status_code: 成功时的状态码
    """
    if not result.ok:
        return error_response(result.error.code, result.error.message)
    body = to_json(result.payload)
    return JSONResponse(
        status_code=status_code,
        content=body if key is None else {key: body},
    )

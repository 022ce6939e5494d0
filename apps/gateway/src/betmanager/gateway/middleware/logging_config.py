"""structlog 配置模块

BETMANAGER_LOG_FORMAT 选择渲染：dev（默认，控制台彩色输出）或 json（每行一个事件，
便于采集 command_executed / state_persisted 等审计相关事件）。
BETMANAGER_LOG_LEVEL 控制根日志级别，无法识别的取值回落到 INFO。

aiosqlite 每次语句执行都会打 debug 日志，sse_starlette 每个心跳也会记录，
这两个 logger 固定在 WARNING，避免 debug 模式下淹没命令日志。
"""

import logging
import os

import structlog

LOG_FORMAT_ENV = "BETMANAGER_LOG_FORMAT"
LOG_LEVEL_ENV = "BETMANAGER_LOG_LEVEL"

_NOISY_LOGGERS = ("aiosqlite", "sse_starlette")


def resolve_log_level(value: str | None) -> int:
    """级别名（不区分大小写）-> logging 常量，未知值为 INFO"""
    level = logging.getLevelName((value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """初始化 structlog 与标准库 logging

    structlog 事件与第三方库经 stdlib 发出的日志共用同一处理器链，
    请求中间件绑定的 request_id / actor / 实体 ID 会合并进每条记录。
    """
    log_format = os.environ.get(LOG_FORMAT_ENV, "dev")
    log_level = resolve_log_level(os.environ.get(LOG_LEVEL_ENV))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

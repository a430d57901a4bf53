"""structlog 配置模块

渲染模式由 SALESBOARD_LOG_FORMAT 决定（dev / json），
级别由 SALESBOARD_LOG_LEVEL 决定；httpx / uvicorn.access 的逐请求日志降为 WARNING。
"""

import logging
import os

import structlog

# 第三方逐请求日志（HttpTaskSource 拉取、uvicorn 访问日志）与 LoggingMiddleware 重复
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    if log_format != "dev":
        structlog.get_logger().warning("unknown_log_format", log_format=log_format, fallback="dev")
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 配置

    Args:
        log_format: "json" 结构化输出 / "dev" 可读输出，None 时读取 SALESBOARD_LOG_FORMAT
        log_level: 日志级别名，None 时读取 SALESBOARD_LOG_LEVEL（默认 INFO）
    """
    log_format = log_format or os.environ.get("SALESBOARD_LOG_FORMAT", "dev")
    log_level = log_level or os.environ.get("SALESBOARD_LOG_LEVEL", "INFO")
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_build_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

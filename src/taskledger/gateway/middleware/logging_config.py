"""structlog 配置

TASKLEDGER_LOG_FORMAT: dev（默认，控制台可读输出）或 json。
TASKLEDGER_LOG_LEVEL: 根 logger 级别，默认 INFO。
"""

import logging
import os

import structlog

# 这些库的 INFO 日志与 request_started / request_completed 重复
_QUIET_LOGGERS = ("uvicorn.access", "aiosqlite")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging() -> None:
    """配置 structlog，并经由标准库 logging 输出

    structlog 与第三方库（uvicorn、fastapi）的日志共用一个 handler，
    因此两者格式一致。
    """
    log_format = os.environ.get("TASKLEDGER_LOG_FORMAT", "dev").lower()
    level = getattr(
        logging,
        os.environ.get("TASKLEDGER_LOG_LEVEL", "INFO").upper(),
        logging.INFO,
    )

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=pre_chain,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

"""structlog 配置模块

EVENTADMIN_LOG_FORMAT 选择渲染模式（dev 可读输出 / json 结构化输出），
EVENTADMIN_LOG_LEVEL 控制日志级别。

日志中会出现请求方地址与合作方调用信息，因此：
- 合作方凭据类字段一律脱敏后再渲染
- httpx 自身的请求日志（URL 含请求方地址）只保留 WARNING 及以上
"""

import logging
import os

import structlog

LOG_FORMAT_ENV = "EVENTADMIN_LOG_FORMAT"
LOG_LEVEL_ENV = "EVENTADMIN_LOG_LEVEL"

# 需要脱敏的字段名（小写比较）
SENSITIVE_KEYS = frozenset({"password", "ad_partner_password", "authorization", "auth"})
REDACTED = "***"

# 外部调用相关的第三方 logger
_QUIET_LOGGERS = ("httpx", "httpcore")


def redact_partner_credentials(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """structlog processor：脱敏合作方凭据字段"""
    for key in event_dict:
        if key.lower() in SENSITIVE_KEYS and event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


def build_shared_processors() -> list[structlog.types.Processor]:
    """structlog 与标准库 logging 共用的 processor 链"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_partner_credentials,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 配置

    参数为空时从环境变量读取，默认 dev / INFO。
    """
    log_format = log_format or os.environ.get(LOG_FORMAT_ENV, "dev")
    log_level = (log_level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()

    shared_processors = build_shared_processors()

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
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

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

"""structlog 配置模块

Gateway 与 CLI 共用一套配置：structlog 事件经标准库 logging 统一输出到 stderr，
stdout 只留给 CLI 的命令输出（会话 ID、status 文本等），便于脚本解析。
"""

import logging
import os
import sys

import structlog

LOG_FORMATS = ("dev", "json")


def _shared_processors() -> list[structlog.types.Processor]:
    """structlog 事件与第三方 stdlib 日志（uvicorn 等）共用的处理器链"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    # 输出被重定向（agent 捕获 stderr）时不带 ANSI 颜色
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _resolve_level(name: str, default: str) -> int:
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    return logging.getLevelName(default.upper())


def setup_logging(default_level: str = "INFO") -> None:
    """初始化 structlog 配置

    环境变量：
    - COUNCIL_LOG_FORMAT: "dev"（默认，可读输出）或 "json"（结构化输出）
    - COUNCIL_LOG_LEVEL: 根 logger 级别；未设置或无法识别时使用 default_level

    Gateway 用默认的 INFO；CLI 传入 WARNING，正常使用时 stderr 保持安静。
    重复调用会替换根 logger 的 handler，不会重复输出。
    """
    log_format = os.environ.get("COUNCIL_LOG_FORMAT", "dev")
    level_name = os.environ.get("COUNCIL_LOG_LEVEL", default_level)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=shared,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_level(level_name, default_level))

    if log_format not in LOG_FORMATS:
        structlog.get_logger().warning(
            "invalid_log_format", value=log_format, fallback="dev"
        )

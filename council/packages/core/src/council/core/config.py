"""配置常量模块 -- 可通过环境变量覆盖

包含存储根目录、等待轮次的超时与轮询间隔等可配置项。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()

# 会话日志文件名
EVENTS_FILENAME: str = "events.jsonl"

# 默认等待轮次超时（秒）
DEFAULT_AWAIT_TIMEOUT_S: float = 300.0

# 默认轮询间隔（秒）
DEFAULT_POLL_INTERVAL_S: float = 2.0


def get_council_home() -> Path:
    """获取存储根目录（默认 ~/.council）"""
    if val := os.environ.get("COUNCIL_HOME"):
        return Path(val)
    return Path.home() / ".council"


def _get_positive_float(env_var: str, default: float) -> float:
    val = os.environ.get(env_var)
    if val is None:
        return default
    try:
        parsed = float(val)
    except ValueError:
        parsed = -1.0
    if parsed <= 0:
        log.warning("invalid_config", env_var=env_var, value=val, fallback=default)
        return default
    return parsed


def get_await_timeout_s() -> float:
    """获取 status --await 默认超时"""
    return _get_positive_float("COUNCIL_AWAIT_TIMEOUT_S", DEFAULT_AWAIT_TIMEOUT_S)


def get_poll_interval_s() -> float:
    """获取等待轮次时的轮询间隔"""
    return _get_positive_float("COUNCIL_POLL_INTERVAL_S", DEFAULT_POLL_INTERVAL_S)

"""会话路径解析

会话 ID 原样作为一个路径片段：<home>/sessions/<id>/events.jsonl。
不能作为单个安全片段的 ID 直接拒绝，保证不同 ID 不会指向同一文件。
"""

from pathlib import Path

from ulid import ULID

from ..config import EVENTS_FILENAME, get_council_home
from ..exceptions import InvalidSessionIdError

SESSIONS_DIRNAME = "sessions"

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def validate_session_id(session_id: str) -> None:
    """校验会话 ID 可作为单个路径片段

    Raises:
        InvalidSessionIdError: 空串、"."、".." 或包含路径分隔符/NUL
    """
    if session_id in ("", ".", "..") or any(c in session_id for c in _FORBIDDEN_CHARS):
        raise InvalidSessionIdError(session_id)


def sessions_path() -> Path:
    """所有会话所在目录"""
    return get_council_home() / SESSIONS_DIRNAME


def session_dir_path(session_id: str) -> Path:
    validate_session_id(session_id)
    return sessions_path() / session_id


def session_events_path(session_id: str) -> Path:
    """会话事件日志文件路径"""
    return session_dir_path(session_id) / EVENTS_FILENAME


def ensure_session_dir(session_id: str) -> Path:
    """创建会话目录（含所有缺失的上级目录），重复调用无副作用"""
    path = session_dir_path(session_id)
    path.mkdir(parents=True, exist_ok=True)
    return path


def session_exists(session_id: str) -> bool:
    """日志文件是否存在（不打开文件）"""
    return session_events_path(session_id).is_file()


def generate_session_id() -> str:
    """生成新的会话 ID：小写 ULID，时间有序且对路径安全"""
    return str(ULID()).lower()

"""Council Core Store -- 基于文件的会话日志持久化

每个会话一个 JSONL 日志文件，变更在排他文件锁内完成。
"""

from .event_log import append_event, load_session, read_lines
from .lock import LockHandle, acquire_lock, exclusive_lock, release_lock
from .paths import (
    ensure_session_dir,
    generate_session_id,
    session_dir_path,
    session_events_path,
    session_exists,
    sessions_path,
    validate_session_id,
)
from .transaction import (
    create_session,
    join_session,
    leave_session,
    post_message,
    resolve_next_speaker,
)

__all__ = [
    # 路径
    "sessions_path",
    "session_dir_path",
    "session_events_path",
    "ensure_session_dir",
    "session_exists",
    "validate_session_id",
    "generate_session_id",
    # 锁
    "LockHandle",
    "acquire_lock",
    "release_lock",
    "exclusive_lock",
    # 日志
    "read_lines",
    "append_event",
    "load_session",
    # 变更协议
    "create_session",
    "join_session",
    "leave_session",
    "post_message",
    "resolve_next_speaker",
]

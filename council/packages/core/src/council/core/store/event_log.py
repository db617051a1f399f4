"""会话事件日志 -- 每个会话一个 JSONL 文件

日志 append-only：只追加行，不改写、不删除。
写入只在持锁期间进行；只读查询走无锁的 open-read-close。
"""

import os

from ..exceptions import SessionNotFoundError
from ..models.event import Event, encode_event
from ..models.session import Session
from ..replay import replay
from .lock import LockHandle
from .paths import session_events_path


def read_lines(handle: LockHandle) -> list[bytes]:
    """持锁读取日志全部行"""
    handle.file.seek(0)
    return handle.file.read().splitlines()


def append_event(handle: LockHandle, event: Event) -> None:
    """追加一个事件行（append-only）

    编码后的行与换行符一次性写入并 fsync，尽量缩小无锁读者看到半行的窗口。
    注意：此方法不加锁，需由调用方持有 handle。
    """
    handle.file.write(encode_event(event) + b"\n")
    handle.file.flush()
    os.fsync(handle.file.fileno())


def load_session(session_id: str) -> Session:
    """无锁读取并重放会话（用于只读的状态查询）

    Raises:
        SessionNotFoundError: 日志文件不存在
        MalformedEventError: 日志中有无法解码的行
    """
    path = session_events_path(session_id)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError:
        raise SessionNotFoundError(session_id) from None

    return replay(session_id, data.splitlines())

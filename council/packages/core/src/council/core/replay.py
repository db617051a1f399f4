"""重放模块 -- 从事件日志重建 Session 派生状态

重放是纯函数：相同字节 → 相同状态。
不容忍损坏行：任一行解码失败立即中止，不做部分重放。
"""

from collections.abc import Iterable

from .exceptions import MalformedEventError
from .models.event import Event, JoinedEvent, LeftEvent, decode_event
from .models.session import Session


def apply_event(session: Session, event: Event) -> None:
    """将单个事件应用到 Session（内存中就地修改）

    Args:
        session: 要更新的会话快照
        event: 要应用的事件
    """
    session.events.append(event)

    if isinstance(event, JoinedEvent):
        session.participants[event.participant] = True
    elif isinstance(event, LeftEvent):
        session.participants[event.participant] = False


def replay(session_id: str, lines: Iterable[bytes | str]) -> Session:
    """按顺序重放原始日志行，得到当前聚合状态

    空行（含仅空白的行）静默跳过。

    Args:
        session_id: 会话 ID
        lines: 日志原始行（不要求去掉换行符）

    Returns:
        重放得到的 Session

    Raises:
        MalformedEventError: 任一非空行无法解码，携带行号与会话 ID
    """
    session = Session(id=session_id)

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            event = decode_event(line)
        except MalformedEventError as e:
            raise MalformedEventError(
                e.reason,
                line_number=line_number,
                session_id=session_id,
            ) from e
        apply_event(session, event)

    return session

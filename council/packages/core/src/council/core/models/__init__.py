"""Council Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import MODERATOR, RESERVED_NAMES, EventType, is_reserved_name
from .event import (
    BaseEvent,
    Event,
    JoinedEvent,
    LeftEvent,
    MessageEvent,
    SessionCreatedEvent,
    decode_event,
    encode_event,
    new_joined_event,
    new_left_event,
    new_message_event,
    new_session_created_event,
    now_millis,
)
from .session import Session

__all__ = [
    # 枚举 / 保留名
    "EventType",
    "MODERATOR",
    "RESERVED_NAMES",
    "is_reserved_name",
    # Event
    "BaseEvent",
    "Event",
    "SessionCreatedEvent",
    "JoinedEvent",
    "LeftEvent",
    "MessageEvent",
    "now_millis",
    "new_session_created_event",
    "new_joined_event",
    "new_left_event",
    "new_message_event",
    # 编解码
    "encode_event",
    "decode_event",
    # Session
    "Session",
]

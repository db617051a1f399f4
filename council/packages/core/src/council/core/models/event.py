"""Event 数据模型 -- 会话事件的标签联合

事件日志 append-only，不允许更新或删除。
事件在序列中的位置即其身份：事件序号（1 起）不落盘，读取时按 index+1 计算。
每个事件编码为一行自描述的 JSON（type 判别字段 + 时间戳 + 类型专属字段）。
"""

import time
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..exceptions import MalformedEventError
from .enums import EventType


def now_millis() -> int:
    """当前时间戳（毫秒）"""
    return time.time_ns() // 1_000_000


class BaseEvent(BaseModel):
    """所有事件的公共字段"""

    model_config = ConfigDict(frozen=True)

    type: str = Field(description="事件判别字段")
    timestamp_millis: int = Field(description="事件时间戳（毫秒，epoch 起）")


class SessionCreatedEvent(BaseEvent):
    """session_created 事件，日志中恰好一条且位于首位"""

    type: Literal[EventType.SESSION_CREATED] = EventType.SESSION_CREATED
    id: str = Field(description="会话 ID")


class JoinedEvent(BaseEvent):
    """joined 事件"""

    type: Literal[EventType.JOINED] = EventType.JOINED
    participant: str


class LeftEvent(BaseEvent):
    """left 事件"""

    type: Literal[EventType.LEFT] = EventType.LEFT
    participant: str


class MessageEvent(BaseEvent):
    """message 事件

    next 指定此消息之后应发言的参与者（或 Moderator）。
    """

    type: Literal[EventType.MESSAGE] = EventType.MESSAGE
    participant: str
    content: str
    next: str = Field(description="下一位发言者")


Event = Annotated[
    SessionCreatedEvent | JoinedEvent | LeftEvent | MessageEvent,
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[Event] = TypeAdapter(Event)


def new_session_created_event(session_id: str) -> SessionCreatedEvent:
    return SessionCreatedEvent(timestamp_millis=now_millis(), id=session_id)


def new_joined_event(participant: str) -> JoinedEvent:
    return JoinedEvent(timestamp_millis=now_millis(), participant=participant)


def new_left_event(participant: str) -> LeftEvent:
    return LeftEvent(timestamp_millis=now_millis(), participant=participant)


def new_message_event(participant: str, content: str, next_speaker: str) -> MessageEvent:
    return MessageEvent(
        timestamp_millis=now_millis(),
        participant=participant,
        content=content,
        next=next_speaker,
    )


def encode_event(event: Event) -> bytes:
    """将事件序列化为一行 JSON（不含换行符，由追加方补充）"""
    return event.model_dump_json().encode("utf-8")


def decode_event(line: bytes | str) -> Event:
    """解析一行 JSON 为对应的事件类型

    先看 type 判别字段，再按对应形状校验；判别值未知、缺失或字段形状不符
    都视为 MalformedEventError。

    Raises:
        MalformedEventError: 行内容无法解码为四种事件之一
    """
    try:
        return _event_adapter.validate_json(line)
    except ValidationError as e:
        raise MalformedEventError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    """将 pydantic 校验错误压缩为单行原因"""
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    if loc:
        return f"{loc}: {first['msg']}"
    return first["msg"]

"""Domain Models 单元测试

测试内容：
1. 枚举与保留名
2. 事件构造与 JSON 行编解码
3. 非法行的解码错误
4. Session 派生查询
"""

import json

import pytest
from council.core.exceptions import MalformedEventError
from council.core.models import (
    MODERATOR,
    RESERVED_NAMES,
    EventType,
    JoinedEvent,
    LeftEvent,
    MessageEvent,
    Session,
    SessionCreatedEvent,
    decode_event,
    encode_event,
    is_reserved_name,
    new_joined_event,
    new_left_event,
    new_message_event,
    new_session_created_event,
)
from council.core.replay import apply_event
from pydantic import ValidationError


def _session_of(*events) -> Session:
    session = Session(id="test-session")
    for event in events:
        apply_event(session, event)
    return session


class TestEnums:
    """枚举与保留名"""

    def test_event_type_values(self):
        """EventType 判别值与 JSON 中的 type 一致"""
        assert EventType.SESSION_CREATED == "session_created"
        assert EventType.JOINED == "joined"
        assert EventType.LEFT == "left"
        assert EventType.MESSAGE == "message"

    def test_moderator_is_reserved(self):
        assert MODERATOR == "Moderator"
        assert MODERATOR in RESERVED_NAMES
        assert is_reserved_name("Moderator")

    def test_reserved_name_is_case_sensitive(self):
        """保留名精确匹配，大小写不同的名称不是保留名"""
        assert not is_reserved_name("moderator")
        assert not is_reserved_name("MODERATOR")
        assert not is_reserved_name("Moderator ")


class TestEventConstruction:
    """事件构造"""

    def test_constructors_stamp_time(self):
        event = new_joined_event("Alice")
        assert event.type == EventType.JOINED
        assert event.participant == "Alice"
        assert event.timestamp_millis > 1_600_000_000_000

    def test_message_constructor_sets_next(self):
        event = new_message_event("Alice", "hi", "Bob")
        assert event.type == "message"
        assert event.next == "Bob"

    def test_events_are_frozen(self):
        """事件不可变"""
        event = new_left_event("Alice")
        with pytest.raises(ValidationError):
            event.participant = "Bob"


class TestEventCodec:
    """JSON 行编解码"""

    @pytest.mark.parametrize(
        "event",
        [
            SessionCreatedEvent(timestamp_millis=1, id="quiet-brave-otter"),
            JoinedEvent(timestamp_millis=2, participant="Alice"),
            LeftEvent(timestamp_millis=3, participant="Alice"),
            MessageEvent(timestamp_millis=4, participant="Alice", content="hi", next="Bob"),
        ],
    )
    def test_round_trip(self, event):
        """四种事件编码后解码得到相同事件"""
        decoded = decode_event(encode_event(event))
        assert decoded == event
        assert type(decoded) is type(event)

    def test_encoded_line_shape(self):
        """编码为单行自描述 JSON"""
        event = MessageEvent(timestamp_millis=42, participant="Alice", content="a\nb", next="Bob")
        line = encode_event(event)

        assert b"\n" not in line
        assert json.loads(line) == {
            "type": "message",
            "timestamp_millis": 42,
            "participant": "Alice",
            "content": "a\nb",
            "next": "Bob",
        }

    def test_decode_existing_line(self):
        """可解码已有日志中的行"""
        line = b'{"type":"joined","timestamp_millis":1700000000000,"participant":"Alice"}'
        event = decode_event(line)
        assert isinstance(event, JoinedEvent)
        assert event.type is EventType.JOINED
        assert event.participant == "Alice"
        assert event.timestamp_millis == 1700000000000

    @pytest.mark.parametrize(
        ("event", "expected"),
        [
            (new_session_created_event("quiet-brave-otter"), EventType.SESSION_CREATED),
            (new_joined_event("Alice"), EventType.JOINED),
            (new_left_event("Alice"), EventType.LEFT),
            (new_message_event("Alice", "hi", "Bob"), EventType.MESSAGE),
        ],
    )
    def test_type_field_uses_event_type(self, event, expected: EventType):
        """type 字段取 EventType 成员，落盘仍为纯字符串"""
        assert event.type is expected
        assert json.loads(encode_event(event))["type"] == expected.value

    def test_decode_accepts_str(self):
        event = decode_event('{"type":"left","timestamp_millis":5,"participant":"Bob"}')
        assert isinstance(event, LeftEvent)

    def test_session_created_round_trip_from_constructor(self):
        event = new_session_created_event("quiet-brave-otter")
        decoded = decode_event(encode_event(event))
        assert isinstance(decoded, SessionCreatedEvent)
        assert decoded.id == "quiet-brave-otter"


class TestMalformedEvents:
    """非法行解码"""

    @pytest.mark.parametrize(
        "line",
        [
            b"not json",
            b"{}",
            b'{"type":"unknown","timestamp_millis":1}',
            b'{"timestamp_millis":1,"participant":"Alice"}',
            b'{"type":"joined","timestamp_millis":1}',
            b'{"type":"message","timestamp_millis":1,"participant":"Alice","content":"hi"}',
            b'{"type":"joined","participant":"Alice"}',
        ],
    )
    def test_malformed_line_raises(self, line):
        with pytest.raises(MalformedEventError) as exc_info:
            decode_event(line)
        assert exc_info.value.code == "MALFORMED_EVENT"
        assert exc_info.value.line_number is None
        assert str(exc_info.value).startswith("Malformed event: ")


class TestSessionQueries:
    """Session 派生查询"""

    def test_empty_session(self):
        session = Session(id="s")
        assert session.event_count == 0
        assert session.active_participants() == []
        assert session.latest_message_next() == ""
        assert session.previous_speaker("Alice") == ""

    def test_active_participants_sorted_without_moderator(self):
        session = _session_of(
            new_joined_event("Carol"),
            new_joined_event(MODERATOR),
            new_joined_event("Alice"),
            new_joined_event("Bob"),
            new_left_event("Bob"),
        )
        assert session.active_participants() == ["Alice", "Carol"]
        assert session.is_active_participant("Alice")
        assert not session.is_active_participant("Bob")
        assert not session.is_active_participant("Nobody")

    def test_previous_speaker_skips_excluded(self):
        session = _session_of(
            new_joined_event("Alice"),
            new_joined_event("Bob"),
            new_message_event("Bob", "one", "Alice"),
            new_message_event("Alice", "two", "Bob"),
        )
        assert session.previous_speaker("Alice") == "Bob"
        assert session.previous_speaker("Bob") == "Alice"

    def test_previous_speaker_when_only_self_spoke(self):
        session = _session_of(
            new_joined_event("Alice"),
            new_message_event("Alice", "one", MODERATOR),
        )
        assert session.previous_speaker("Alice") == ""

    def test_latest_message_next(self):
        session = _session_of(
            new_joined_event("Alice"),
            new_joined_event("Bob"),
            new_message_event("Alice", "one", "Bob"),
            new_message_event("Bob", "two", "Alice"),
            new_joined_event("Carol"),
        )
        assert session.latest_message_next() == "Alice"

    def test_random_active_participant_is_deterministic(self):
        """候选按名称排序取第一位"""
        session = _session_of(
            new_joined_event("Carol"),
            new_joined_event("Bob"),
            new_joined_event("Alice"),
        )
        assert session.random_active_participant("Alice") == "Bob"
        assert session.random_active_participant("Bob") == "Alice"
        assert session.random_active_participant(MODERATOR) == "Alice"

    def test_random_active_participant_none_left(self):
        session = _session_of(new_joined_event("Alice"))
        assert session.random_active_participant("Alice") == ""

    def test_events_after_numbers_from_one(self):
        session = _session_of(
            new_session_created_event("s"),
            new_joined_event("Alice"),
            new_joined_event("Bob"),
        )
        assert [n for n, _ in session.events_after(0)] == [1, 2, 3]
        numbered = session.events_after(2)
        assert len(numbered) == 1
        assert numbered[0][0] == 3
        assert numbered[0][1].participant == "Bob"
        assert session.events_after(3) == []

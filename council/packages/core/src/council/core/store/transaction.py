"""会话变更协议 -- 加锁 → 重放 → 校验 → 追加 → 释放

四个变更操作（create / join / leave / post）共用同一流程：
1. 解析路径；join/leave/post 要求日志已存在
2. 获取排他锁
3. 持锁后重放全部日志，得到其他进程无法并发修改的当前状态
4. 操作相关校验
5. 构造事件并追加一行
6. 释放锁（任何退出路径都会执行）

操作之间绝不嵌套对同一路径的加锁（锁不可重入）。
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from ..exceptions import (
    InvalidNextParticipantError,
    NameTakenError,
    NotAParticipantError,
    ParticipantNotInSessionError,
    ReservedNameError,
    SessionAlreadyExistsError,
    SessionNotFoundError,
    StaleStateError,
)
from ..models.enums import MODERATOR, is_reserved_name
from ..models.event import (
    SessionCreatedEvent,
    new_joined_event,
    new_left_event,
    new_message_event,
    new_session_created_event,
)
from ..models.session import Session
from ..replay import replay
from .event_log import append_event, read_lines
from .lock import LockHandle, exclusive_lock
from .paths import ensure_session_dir, session_events_path, session_exists

log = structlog.get_logger()


def _starts_with_created(session: Session) -> bool:
    return session.event_count > 0 and isinstance(session.events[0], SessionCreatedEvent)


@contextmanager
def _locked_session(
    session_id: str,
    must_exist: bool = True,
) -> Iterator[tuple[LockHandle, Session]]:
    """持锁并重放当前日志，yield (句柄, 会话快照)"""
    path = session_events_path(session_id)
    if must_exist and not session_exists(session_id):
        raise SessionNotFoundError(session_id)

    with exclusive_lock(path) as handle:
        session = replay(session_id, read_lines(handle))
        # 创建尚未落盘（或中途失败）的空日志不算已存在的会话
        if must_exist and not _starts_with_created(session):
            raise SessionNotFoundError(session_id)
        yield handle, session


def create_session(session_id: str) -> None:
    """创建会话：写入唯一的 session_created 事件

    Raises:
        SessionAlreadyExistsError: 日志中已有事件
    """
    ensure_session_dir(session_id)

    with _locked_session(session_id, must_exist=False) as (handle, session):
        if session.event_count > 0:
            raise SessionAlreadyExistsError(session_id)
        append_event(handle, new_session_created_event(session_id))

    log.info("session_created", session_id=session_id)


def join_session(session_id: str, name: str) -> int:
    """加入会话

    Returns:
        新 joined 事件的序号，参与者以此作为首次发言的 after 基线

    Raises:
        ReservedNameError: name 是保留名（区分大小写）
        SessionNotFoundError: 会话不存在
        NameTakenError: name 已是活跃参与者
    """
    if is_reserved_name(name):
        raise ReservedNameError(name)

    with _locked_session(session_id) as (handle, session):
        if session.is_active_participant(name):
            raise NameTakenError(name)
        append_event(handle, new_joined_event(name))
        event_number = session.event_count + 1

    log.info(
        "participant_joined",
        session_id=session_id,
        participant=name,
        event_number=event_number,
    )
    return event_number


def leave_session(session_id: str, name: str) -> None:
    """离开会话

    Raises:
        SessionNotFoundError: 会话不存在
        ParticipantNotInSessionError: name 不是活跃参与者
    """
    with _locked_session(session_id) as (handle, session):
        if not session.is_active_participant(name):
            raise ParticipantNotInSessionError(name, session_id)
        append_event(handle, new_left_event(name))

    log.info("participant_left", session_id=session_id, participant=name)


def resolve_next_speaker(session: Session, participant: str, next_speaker: str | None) -> str:
    """决定消息的 next 字段

    未显式指定时依次回退：
    1. 上一位（不是自己的）发言者，且仍然活跃
    2. 其他任一活跃参与者
    3. Moderator

    显式指定时必须是 Moderator 或活跃参与者。

    Raises:
        InvalidNextParticipantError: 显式 next 不合法
    """
    if next_speaker:
        if next_speaker != MODERATOR and not session.is_active_participant(next_speaker):
            raise InvalidNextParticipantError(next_speaker)
        return next_speaker

    previous = session.previous_speaker(participant)
    if previous and session.is_active_participant(previous):
        return previous

    return session.random_active_participant(participant) or MODERATOR


def post_message(
    session_id: str,
    participant: str,
    content: str,
    *,
    after_event_num: int,
    next_speaker: str | None = None,
) -> int:
    """发言（乐观并发控制）

    Args:
        session_id: 会话 ID
        participant: 发言者；Moderator 免加入
        content: 消息内容
        after_event_num: 调用方读到的事件数，必须与当前事件数完全相等
        next_speaker: 指定下一位发言者，None/空串表示自动决定

    Returns:
        新 message 事件的序号

    Raises:
        SessionNotFoundError: 会话不存在
        StaleStateError: after_event_num 与当前事件数不一致
        NotAParticipantError: 发言者未加入或已离开
        InvalidNextParticipantError: 显式 next 不合法
    """
    with _locked_session(session_id) as (handle, session):
        if session.event_count != after_event_num:
            raise StaleStateError(
                session_id=session_id,
                expected_event_num=after_event_num,
                actual_event_num=session.event_count,
            )

        if participant != MODERATOR and not session.is_active_participant(participant):
            raise NotAParticipantError(participant, session_id)

        resolved = resolve_next_speaker(session, participant, next_speaker)
        append_event(handle, new_message_event(participant, content, resolved))
        event_number = session.event_count + 1

    log.info(
        "message_posted",
        session_id=session_id,
        participant=participant,
        next=resolved,
        event_number=event_number,
    )
    return event_number

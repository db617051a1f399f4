"""等待轮次 -- 协作式轮询

存储层没有通知原语，因此用显式的 sleep-and-recheck 循环：
完全在锁之外反复无锁重放，直到轮到指定参与者或超过截止时间。
"""

import time
from collections.abc import Callable

import structlog

from .config import get_await_timeout_s, get_poll_interval_s
from .exceptions import AwaitTimeoutError
from .models.session import Session
from .store.event_log import load_session

log = structlog.get_logger()


def wait_for_turn(
    session_id: str,
    participant: str,
    after: int = 0,
    timeout_s: float | None = None,
    poll_interval_s: float | None = None,
    *,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> Session:
    """阻塞直到 after 之后出现新事件且最新消息的 next 是 participant

    新事件出现但不是自己的轮次时，游标前移到当前事件数继续等待。

    Args:
        session_id: 会话 ID
        participant: 等待轮次的参与者
        after: 调用方已读到的事件序号
        timeout_s: 超时秒数，None 取配置默认值
        poll_interval_s: 轮询间隔，None 取配置默认值
        clock: 单调时钟（测试可注入）
        sleep: 休眠函数（测试可注入）

    Returns:
        轮到 participant 时的会话快照

    Raises:
        AwaitTimeoutError: 超过截止时间
        SessionNotFoundError / MalformedEventError: 读取失败时原样抛出
    """
    if timeout_s is None:
        timeout_s = get_await_timeout_s()
    if poll_interval_s is None:
        poll_interval_s = get_poll_interval_s()

    deadline = clock() + timeout_s
    cursor = after

    while True:
        if clock() > deadline:
            log.info(
                "await_turn_timeout",
                session_id=session_id,
                participant=participant,
                timeout_s=timeout_s,
            )
            raise AwaitTimeoutError(timeout_s)

        session = load_session(session_id)
        if session.event_count > cursor:
            if session.latest_message_next() == participant:
                log.debug(
                    "await_turn_ready",
                    session_id=session_id,
                    participant=participant,
                    event_count=session.event_count,
                )
                return session
            cursor = session.event_count

        sleep(poll_interval_s)

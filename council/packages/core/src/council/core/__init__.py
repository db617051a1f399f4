"""Council Core -- 多参与者轮流协作的事件日志内核

对外暴露会话的创建/加入/离开/发言、无锁读取与等待轮次。
"""

from .exceptions import CouncilError
from .models import MODERATOR, Session
from .polling import wait_for_turn
from .store import (
    create_session,
    generate_session_id,
    join_session,
    leave_session,
    load_session,
    post_message,
)

__all__ = [
    "MODERATOR",
    "CouncilError",
    "Session",
    "create_session",
    "generate_session_id",
    "join_session",
    "leave_session",
    "load_session",
    "post_message",
    "wait_for_turn",
]

"""SessionService -- Gateway 侧的会话业务逻辑

core 的操作是同步阻塞的（文件锁等待 + 文件 I/O），统一放到线程中执行，
避免阻塞事件循环。网页端的发言固定以 Moderator 身份进行。
"""

import asyncio
from typing import Any

import structlog
from council.core.models import MODERATOR, Event
from council.core.store import (
    create_session,
    generate_session_id,
    load_session,
    post_message,
)

log = structlog.get_logger()


def flatten_event(number: int, event: Event) -> dict[str, Any]:
    """将事件展平为 API 格式，附带 1 起的事件序号"""
    return {"number": number, **event.model_dump()}


class SessionService:
    """会话业务服务"""

    async def create_session(self) -> str:
        """以新生成的 ID 创建会话"""
        session_id = generate_session_id()
        await asyncio.to_thread(create_session, session_id)
        return session_id

    async def get_status(self, session_id: str, after: int = 0) -> dict[str, Any]:
        """会话状态：活跃参与者、事件总数、after 之后的事件"""
        session = await asyncio.to_thread(load_session, session_id)
        return {
            "session_id": session.id,
            "participants": session.active_participants(),
            "event_count": session.event_count,
            "events": [flatten_event(n, e) for n, e in session.events_after(after)],
        }

    async def get_participants(self, session_id: str) -> list[str]:
        session = await asyncio.to_thread(load_session, session_id)
        return session.active_participants()

    async def post_as_moderator(
        self,
        session_id: str,
        content: str,
        after: int,
        next_speaker: str | None = None,
    ) -> int:
        """以 Moderator 身份发言，返回新事件序号"""
        event_number = await asyncio.to_thread(
            post_message,
            session_id,
            MODERATOR,
            content,
            after_event_num=after,
            next_speaker=next_speaker,
        )
        await log.ainfo("moderator_posted", event_number=event_number)
        return event_number

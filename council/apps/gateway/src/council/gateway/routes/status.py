"""会话查询路由

GET /api/status: 参与者列表、事件总数，以及 after 之后的事件（每个事件带 1 起的序号）。
GET /api/participants: 仅返回活跃参与者列表。
"""

from typing import Any

from council.core.exceptions import CouncilError
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ..deps import get_session_service
from ..errors import council_error_response, error_response
from ..services.session_service import SessionService

router = APIRouter()


class StatusResponse(BaseModel):
    """会话状态响应"""

    session_id: str
    participants: list[str]
    event_count: int
    events: list[dict[str, Any]]


class ParticipantsResponse(BaseModel):
    """参与者列表响应"""

    participants: list[str]


@router.get("/api/status", response_model=StatusResponse)
async def get_status(
    session: str | None = Query(default=None, description="会话 ID"),
    after: int = Query(default=0, description="只返回序号大于 after 的事件"),
    service: SessionService = Depends(get_session_service),
):
    """查询会话状态（无锁读取）"""
    if not session:
        return error_response("BAD_REQUEST", "session parameter required", 400)

    try:
        status = await service.get_status(session, after)
    except CouncilError as e:
        return council_error_response(e)

    return StatusResponse(**status)


@router.get("/api/participants", response_model=ParticipantsResponse)
async def get_participants(
    session: str | None = Query(default=None, description="会话 ID"),
    service: SessionService = Depends(get_session_service),
):
    """查询活跃参与者（不含 Moderator，按名称排序）"""
    if not session:
        return error_response("BAD_REQUEST", "session parameter required", 400)

    try:
        participants = await service.get_participants(session)
    except CouncilError as e:
        return council_error_response(e)

    return ParticipantsResponse(participants=participants)

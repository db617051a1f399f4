"""会话创建路由

POST /api/sessions: 生成新的会话 ID 并写入 session_created 事件。
"""

from council.core.exceptions import CouncilError
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from starlette.responses import JSONResponse

from ..deps import get_session_service
from ..errors import council_error_response
from ..services.session_service import SessionService

router = APIRouter()


class CreateSessionResponse(BaseModel):
    session_id: str


@router.post("/api/sessions", response_model=CreateSessionResponse, status_code=201)
async def create_session(service: SessionService = Depends(get_session_service)):
    """创建会话，返回 201"""
    try:
        session_id = await service.create_session()
    except CouncilError as e:
        return council_error_response(e)

    return JSONResponse(
        status_code=201,
        content=CreateSessionResponse(session_id=session_id).model_dump(),
    )

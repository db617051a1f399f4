"""发言路由

POST /api/post: 以 Moderator 身份发言，after 为乐观锁基线。
"""

from council.core.exceptions import CouncilError
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_session_service
from ..errors import council_error_response, error_response
from ..services.session_service import SessionService

router = APIRouter()


class PostRequest(BaseModel):
    """发言请求体"""

    session: str = Field(default="", description="会话 ID")
    content: str = Field(default="", description="消息内容")
    after: int = Field(default=0, description="调用方读到的事件数")
    next: str | None = Field(default=None, description="指定下一位发言者")


class PostResponse(BaseModel):
    """发言响应"""

    event_number: int


@router.post("/api/post", response_model=PostResponse)
async def post_message(
    body: PostRequest,
    service: SessionService = Depends(get_session_service),
):
    """Moderator 发言

    - 会话不存在返回 404
    - 有新活动（after 过期）返回 409
    - next 不合法返回 400
    """
    if not body.session:
        return error_response("BAD_REQUEST", "session field required", 400)
    if not body.content:
        return error_response("BAD_REQUEST", "content field required", 400)

    try:
        event_number = await service.post_as_moderator(
            body.session,
            body.content,
            body.after,
            body.next,
        )
    except CouncilError as e:
        return council_error_response(e)

    return PostResponse(event_number=event_number)

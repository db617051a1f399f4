"""SessionContextMiddleware

将查询参数中的 session 绑定为 structlog 的 session_id，贯穿该请求的所有日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class SessionContextMiddleware(BaseHTTPMiddleware):
    """会话级上下文中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        session_id = request.query_params.get("session")
        if session_id:
            structlog.contextvars.bind_contextvars(session_id=session_id)

        return await call_next(request)

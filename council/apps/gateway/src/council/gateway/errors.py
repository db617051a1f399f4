"""错误响应

所有错误统一为 {"error": {"code": ..., "message": ...}}，code 与 core 异常保持一致。
"""

from council.core.exceptions import CouncilError
from starlette.responses import JSONResponse

_STATUS_BY_CODE: dict[str, int] = {
    "SESSION_NOT_FOUND": 404,
    "STALE_STATE": 409,
    "SESSION_EXISTS": 409,
    "MALFORMED_EVENT": 500,
}


def error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def council_error_response(exc: CouncilError) -> JSONResponse:
    """将 core 异常映射为 HTTP 响应，未列出的业务错误按 400 处理"""
    return error_response(exc.code, exc.message, _STATUS_BY_CODE.get(exc.code, 400))

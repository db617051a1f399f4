"""依赖注入模块 -- 通过 FastAPI Depends 注入服务实例

服务实例通过 app.state 管理，在 create_app 中初始化。
"""

from fastapi import Request

from .services.session_service import SessionService


def get_session_service(request: Request) -> SessionService:
    """从 app.state 获取 SessionService 实例"""
    return request.app.state.session_service

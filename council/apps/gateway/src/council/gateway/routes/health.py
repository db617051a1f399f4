"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含会话存储目录可写性与磁盘空间。
"""

import os
import shutil

import structlog
from council.core.store import sessions_path
from fastapi import APIRouter
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready():
    """Readiness 检查 -- 验证会话存储可用

    检查项：
    1. sessions_dir: 会话目录存在且可写
    2. disk_space_mb: 磁盘剩余空间
    """
    checks: dict = {}
    all_ok = True

    # 1. 会话目录检查
    root = sessions_path()
    if root.is_dir() and os.access(root, os.W_OK):
        checks["sessions_dir"] = "ok"
    elif root.is_dir():
        checks["sessions_dir"] = "error: directory is not writable"
        all_ok = False
    else:
        checks["sessions_dir"] = "error: directory does not exist"
        all_ok = False

    # 2. 磁盘空间检查
    try:
        disk_usage = shutil.disk_usage(root if root.exists() else "/")
        checks["disk_space_mb"] = disk_usage.free // (1024 * 1024)
    except OSError as e:
        log.warning("disk_usage_check_failed", error=str(e))
        checks["disk_space_mb"] = 0
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )

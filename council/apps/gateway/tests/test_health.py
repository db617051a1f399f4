"""健康检查测试

测试内容：
1. GET /health 返回 200 + ok
2. GET /ready 会话目录可写时返回 200 + checks 结构
3. GET /ready 会话目录不存在时返回 503
"""

from council.core.store import sessions_path
from httpx import AsyncClient


class TestHealthCheck:
    """健康检查"""

    async def test_health_returns_200(self, client: AsyncClient):
        """GET /health 永远返回 200"""
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    async def test_ready_when_sessions_dir_exists(self, client: AsyncClient):
        sessions_path().mkdir(parents=True)

        resp = await client.get("/ready")
        assert resp.status_code == 200

        data = resp.json()
        assert data["status"] == "ready"
        assert data["checks"]["sessions_dir"] == "ok"
        assert isinstance(data["checks"]["disk_space_mb"], int)

    async def test_not_ready_without_sessions_dir(self, client: AsyncClient):
        """未经 lifespan 初始化时目录不存在"""
        resp = await client.get("/ready")
        assert resp.status_code == 503

        data = resp.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["sessions_dir"] == "error: directory does not exist"

"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from council.core.store import create_session, join_session
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app():
    """创建测试用 FastAPI app 实例（COUNCIL_HOME 已指向临时目录）"""
    from council.gateway.main import create_app

    yield create_app()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def seeded_session() -> str:
    """Alice、Bob 已加入的会话（事件数 3）"""
    sid = "quiet-brave-otter"
    create_session(sid)
    join_session(sid, "Alice")
    join_session(sid, "Bob")
    return sid

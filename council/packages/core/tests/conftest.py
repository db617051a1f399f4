"""packages/core 测试配置 -- 核心层 fixture"""

import pytest
from council.core.store import create_session


@pytest.fixture
def session_id() -> str:
    """已创建的空会话（仅含 session_created 事件）"""
    sid = "quiet-brave-otter"
    create_session(sid)
    return sid

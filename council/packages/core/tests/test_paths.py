"""会话路径解析测试"""

from pathlib import Path

import pytest
from council.core.config import get_council_home
from council.core.exceptions import InvalidSessionIdError
from council.core.store import (
    ensure_session_dir,
    generate_session_id,
    session_dir_path,
    session_events_path,
    session_exists,
    sessions_path,
    validate_session_id,
)


class TestSessionPaths:
    """路径布局"""

    def test_layout_under_council_home(self, council_home: Path):
        assert sessions_path() == council_home / "sessions"
        assert session_dir_path("abc") == council_home / "sessions" / "abc"
        assert session_events_path("abc") == council_home / "sessions" / "abc" / "events.jsonl"

    def test_default_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """未设置 COUNCIL_HOME 时使用 ~/.council"""
        monkeypatch.delenv("COUNCIL_HOME")
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_council_home() == tmp_path / ".council"

    def test_distinct_ids_distinct_paths(self):
        assert session_events_path("a-b") != session_events_path("a_b")

    @pytest.mark.parametrize("bad_id", ["", ".", "..", "a/b", "../escape", "a\\b", "a\x00b"])
    def test_invalid_ids_rejected(self, bad_id: str):
        with pytest.raises(InvalidSessionIdError) as exc_info:
            session_events_path(bad_id)
        assert exc_info.value.code == "INVALID_SESSION_ID"

    def test_valid_ids(self):
        for sid in ("quiet-brave-otter", "01hq3k5", "a.b", "..a"):
            validate_session_id(sid)


class TestSessionDir:
    """目录创建与存在性"""

    def test_ensure_dir_idempotent(self):
        path = ensure_session_dir("abc")
        assert path.is_dir()
        assert ensure_session_dir("abc") == path

    def test_exists_requires_log_file(self):
        assert not session_exists("abc")
        ensure_session_dir("abc")
        assert not session_exists("abc")
        session_events_path("abc").touch()
        assert session_exists("abc")


class TestGenerateSessionId:
    """会话 ID 生成"""

    def test_lowercase_ulid(self):
        sid = generate_session_id()
        assert len(sid) == 26
        assert sid == sid.lower()
        validate_session_id(sid)

    def test_unique(self):
        ids = {generate_session_id() for _ in range(100)}
        assert len(ids) == 100

"""全局 pytest 配置 -- 每个测试使用独立的临时 COUNCIL_HOME"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def council_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """将存储根目录指向临时目录，避免触碰 ~/.council"""
    home = tmp_path / "council_home"
    monkeypatch.setenv("COUNCIL_HOME", str(home))
    return home

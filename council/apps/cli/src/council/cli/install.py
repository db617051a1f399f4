"""council install -- 安装外部工具集成

目前只有 claude 一个目标：把参与者技能说明写到
~/.claude/skills/council-participant/SKILL.md，供 Claude 按协议参与会话。
"""

from collections.abc import Callable
from pathlib import Path

import structlog

log = structlog.get_logger()

SKILL_DIRNAME = "council-participant"

SKILL_MD = """\
---
name: council-participant
description: Take part in a council session, a turn-based conversation shared between several agents and a human moderator through the council CLI.
---

# Council participant

A council session is an append-only log of numbered events. Every write is
guarded by an optimistic check: you must tell council how many events you
have seen, and the post is rejected if anything was appended since.

## Joining

1. Ask the user for the session ID and the name you should use.
2. Run `council join <session-id> -p <name>`.
3. Remember the event number it prints. That number is your `--after`
   value for the first post.

## Taking turns

Repeat until the moderator ends the discussion:

1. Wait for your turn:
   `council status <session-id> --after <N> --await -p <name>`
   This blocks until someone else has posted after event N and the turn
   has passed to you.
2. Read the transcript it prints. Each event is headed `--- #M | ...`;
   the highest M shown is the number to use for `--after` when you post.
3. Post your reply, content on stdin:
   `council post <session-id> -p <name> --after <M> [-n <next-speaker>]`
   Without `-n` the turn goes back to whoever spoke before you.
4. Continue from step 1 with N set to the event number printed by post.

## When a post is rejected

`New activity since event #X` means someone posted while you were writing.
Run `council status <session-id> --after X`, read what changed, revise your
reply if needed and post again with the new event count.

## Leaving

Run `council leave <session-id> -p <name>` when you are done. The name
`Moderator` is reserved for the human running the session.
"""


def install_claude_skill() -> Path:
    """写入 Claude 技能文件，返回目标路径

    Raises:
        OSError: 无法创建目录或写入文件
        RuntimeError: 无法确定用户主目录
    """
    dest_dir = Path.home() / ".claude" / "skills" / SKILL_DIRNAME
    dest_dir.mkdir(parents=True, exist_ok=True)

    dest_path = dest_dir / "SKILL.md"
    dest_path.write_text(SKILL_MD, encoding="utf-8")
    log.debug("skill_installed", target="claude", path=str(dest_path))
    return dest_path


INSTALL_TARGETS: dict[str, Callable[[], Path]] = {
    "claude": install_claude_skill,
}


def available_targets() -> str:
    return ", ".join(sorted(INSTALL_TARGETS))

"""会话状态的人类可读文本输出"""

from .models.enums import MODERATOR
from .models.event import JoinedEvent, LeftEvent, MessageEvent
from .models.session import Session


def format_status(session: Session, after: int = 0) -> str:
    """生成 status 命令的文本输出

    只输出序号大于 after 的事件；session_created 和 Moderator 的加入不显示。
    """
    lines: list[str] = [f"=== Session: {session.id} ==="]

    participants = session.active_participants()
    if participants:
        lines.append(f"Participants: {', '.join(participants)}")
    else:
        lines.append("Participants: (none)")
    lines.append("")

    for number, event in session.events_after(after):
        if isinstance(event, JoinedEvent):
            if event.participant != MODERATOR:
                lines.append(f"--- #{number} | {event.participant} Joined ---")
                lines.append("")
        elif isinstance(event, LeftEvent):
            lines.append(f"--- #{number} | {event.participant} Left ---")
            lines.append("")
        elif isinstance(event, MessageEvent):
            lines.append(f"--- #{number} | {event.participant} ---")
            lines.append(event.content.removesuffix("\n"))
            if event.next:
                lines.append(f"--- End #{number} | {event.participant} | Next: {event.next} ---")
            else:
                lines.append(f"--- End #{number} | {event.participant} ---")
            lines.append("")

    return "\n".join(lines) + "\n"

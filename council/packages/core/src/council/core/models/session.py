"""Session 聚合模型

Session 不落盘：每次操作都从事件日志完整重放得到一份新的快照。
participants 只由 joined / left 事件更新，只反映每个名称最后一次 joined/left。
"""

from pydantic import BaseModel, Field

from .enums import MODERATOR
from .event import Event, MessageEvent


class Session(BaseModel):
    """会话的派生状态"""

    id: str = Field(description="会话 ID")
    events: list[Event] = Field(default_factory=list, description="按追加顺序排列的事件")
    participants: dict[str, bool] = Field(
        default_factory=dict,
        description="显示名 -> 是否活跃；不在映射中等价于不活跃",
    )

    @property
    def event_count(self) -> int:
        return len(self.events)

    def active_participants(self) -> list[str]:
        """当前活跃参与者（不含 Moderator），按名称排序"""
        return sorted(
            name for name, active in self.participants.items() if active and name != MODERATOR
        )

    def is_active_participant(self, name: str) -> bool:
        return self.participants.get(name, False)

    def previous_speaker(self, excluding: str) -> str:
        """从新到旧查找第一条发言者不是 excluding 的消息

        Returns:
            该消息的发言者；没有则返回空串（包括只有 excluding 发过言的情况）
        """
        for event in reversed(self.events):
            if isinstance(event, MessageEvent) and event.participant != excluding:
                return event.participant
        return ""

    def latest_message_next(self) -> str:
        """最近一条消息指定的 next；尚无消息时返回空串"""
        for event in reversed(self.events):
            if isinstance(event, MessageEvent):
                return event.next
        return ""

    def random_active_participant(self, excluding: str) -> str:
        """在除 excluding 外的活跃参与者中选一位

        选择策略是确定性的：按名称排序取第一位，保证测试可复现。
        没有候选时返回空串。
        """
        for name in self.active_participants():
            if name != excluding:
                return name
        return ""

    def events_after(self, after: int) -> list[tuple[int, Event]]:
        """返回事件序号大于 after 的 (序号, 事件) 列表，序号从 1 起"""
        return [
            (number, event)
            for number, event in enumerate(self.events, start=1)
            if number > after
        ]

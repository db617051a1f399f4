"""枚举与保留名定义

包含 EventType 事件判别值，以及 Moderator 保留身份和 RESERVED_NAMES 集合。
"""

from enum import StrEnum


class EventType(StrEnum):
    """事件类型（JSON 行中的 type 判别字段）"""

    SESSION_CREATED = "session_created"
    JOINED = "joined"
    LEFT = "left"
    MESSAGE = "message"


# 保留身份：不计入参与者，可免加入直接发言
MODERATOR: str = "Moderator"

# 进程启动时构建一次，只做成员判断
RESERVED_NAMES: frozenset[str] = frozenset({MODERATOR})


def is_reserved_name(name: str) -> bool:
    """判断名称是否为保留名（区分大小写，精确匹配）

    Args:
        name: 参与者显示名

    Returns:
        True 如果是保留名，否则 False
    """
    return name in RESERVED_NAMES

"""Council 异常体系

core 内部不做任何恢复：所有条件原样抛给调用方，并携带足够的结构化上下文。
每个异常有稳定的 code 和固定的消息模板，便于自动化调用方做模式匹配。
"""


class CouncilError(Exception):
    """Council 基础异常"""

    code: str = "COUNCIL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SessionNotFoundError(CouncilError):
    """会话日志文件不存在，调用方应先创建会话"""

    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str) -> None:
        super().__init__(
            f"Session '{session_id}' not found. Run 'council new' to create a session."
        )
        self.session_id = session_id


class SessionAlreadyExistsError(CouncilError):
    """重复创建同一会话 ID"""

    code = "SESSION_EXISTS"

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session '{session_id}' already exists.")
        self.session_id = session_id


class InvalidSessionIdError(CouncilError):
    """会话 ID 不能作为单个安全的路径片段"""

    code = "INVALID_SESSION_ID"

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Invalid session id '{session_id}'.")
        self.session_id = session_id


class NameTakenError(CouncilError):
    """加入时名称已被活跃参与者占用"""

    code = "NAME_TAKEN"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Participant '{name}' already exists in this session. Choose a different name."
        )
        self.name = name


class ReservedNameError(CouncilError):
    """使用保留身份加入"""

    code = "RESERVED_NAME"

    def __init__(self, name: str) -> None:
        super().__init__(f"'{name}' is a reserved name. Choose a different name.")
        self.name = name


class StaleStateError(CouncilError):
    """乐观锁校验失败

    调用方必须重新读取并以新的事件序号重试，不允许自动合并。
    """

    code = "STALE_STATE"

    def __init__(
        self,
        session_id: str,
        expected_event_num: int,
        actual_event_num: int,
    ) -> None:
        """
        Args:
            session_id: 会话 ID
            expected_event_num: 调用方提供的 after 基线
            actual_event_num: 加锁后重放得到的实际事件数
        """
        super().__init__(
            f"New activity since event #{expected_event_num} "
            f"(session is at #{actual_event_num}). "
            f"Re-read with 'council status {session_id} --after {expected_event_num}' "
            "before posting."
        )
        self.session_id = session_id
        self.expected_event_num = expected_event_num
        self.actual_event_num = actual_event_num


class NotAParticipantError(CouncilError):
    """未加入（或已离开）的名称尝试发言"""

    code = "NOT_A_PARTICIPANT"

    def __init__(self, name: str, session_id: str) -> None:
        super().__init__(
            f"'{name}' must join the session before posting. "
            f"Run 'council join {session_id}'."
        )
        self.name = name
        self.session_id = session_id


class ParticipantNotInSessionError(CouncilError):
    """离开时名称不是活跃参与者"""

    code = "PARTICIPANT_NOT_IN_SESSION"

    def __init__(self, name: str, session_id: str) -> None:
        super().__init__(f"'{name}' is not a participant in session '{session_id}'.")
        self.name = name
        self.session_id = session_id


class InvalidNextParticipantError(CouncilError):
    """显式指定的 next 既不是活跃参与者也不是 Moderator"""

    code = "INVALID_NEXT_PARTICIPANT"

    def __init__(self, name: str) -> None:
        super().__init__(
            f"'{name}' is not an active participant. "
            "Use an active participant or 'Moderator'."
        )
        self.name = name


class MalformedEventError(CouncilError):
    """日志行无法解码

    对当前操作是致命的：截断重放得到的状态不可用于决策。
    """

    code = "MALFORMED_EVENT"

    def __init__(
        self,
        reason: str,
        line_number: int | None = None,
        session_id: str | None = None,
    ) -> None:
        if line_number is None:
            message = f"Malformed event: {reason}"
        else:
            message = (
                f"Malformed event at line {line_number} of session '{session_id}': {reason}"
            )
        super().__init__(message)
        self.reason = reason
        self.line_number = line_number
        self.session_id = session_id


class AwaitTimeoutError(CouncilError):
    """等待轮次超时"""

    code = "AWAIT_TIMEOUT"

    def __init__(self, timeout_s: float) -> None:
        super().__init__(f"Timeout waiting for turn after {timeout_s:g} seconds")
        self.timeout_s = timeout_s

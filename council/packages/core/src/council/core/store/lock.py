"""会话日志的排他文件锁

对整个日志文件加 flock(LOCK_EX)：按文件、跨进程、建议性（只约束配合的进程）、
不可重入。获取会无限期阻塞，core 不设超时；需要有界等待的调用方自行在外层处理。
"""

import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

import structlog

log = structlog.get_logger()


class LockHandle:
    """持锁句柄，与一个打开的文件描述符一一绑定"""

    def __init__(self, path: Path, file: BinaryIO) -> None:
        self.path = path
        self._file = file

    @property
    def file(self) -> BinaryIO:
        """持锁期间用于读取/追加的文件对象"""
        return self._file

    @property
    def released(self) -> bool:
        return self._file.closed


def acquire_lock(path: Path) -> LockHandle:
    """打开（不存在则创建）文件并阻塞直到拿到排他锁

    文件以 a+b 模式打开：写入总是追加到末尾，读取前需 seek(0)。
    """
    file = open(path, "a+b")  # noqa: SIM115
    try:
        log.debug("session_lock_acquire", path=str(path))
        fcntl.flock(file.fileno(), fcntl.LOCK_EX)
    except BaseException:
        file.close()
        raise
    log.debug("session_lock_acquired", path=str(path))
    return LockHandle(path, file)


def release_lock(handle: LockHandle) -> None:
    """解锁并关闭文件，重复调用无副作用"""
    if handle.released:
        return
    try:
        fcntl.flock(handle.file.fileno(), fcntl.LOCK_UN)
    finally:
        handle.file.close()
        log.debug("session_lock_released", path=str(handle.path))


@contextmanager
def exclusive_lock(path: Path) -> Iterator[LockHandle]:
    """作用域锁：进入时获取，任意退出路径（正常返回或异常）都会释放

    示例：
        with exclusive_lock(path) as handle:
            data = read_all(handle)
            append_line(handle, line)
    """
    handle = acquire_lock(path)
    try:
        yield handle
    finally:
        release_lock(handle)

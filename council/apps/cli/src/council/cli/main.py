"""CLI 入口模块 -- council <command>

支持的命令：
  new      创建会话，输出会话 ID
  join     加入会话
  leave    离开会话
  post     发言（内容来自 stdin 或 --file）
  status   查看会话状态，--await 阻塞等待自己的轮次
  watch    启动 Gateway 网页查看会话
  install  安装外部工具集成（如 claude 技能文件）
"""

import argparse
import sys
from pathlib import Path

import structlog
from council.core.exceptions import CouncilError, SessionNotFoundError
from council.core.format import format_status
from council.core.polling import wait_for_turn
from council.core.store import (
    create_session,
    generate_session_id,
    join_session,
    leave_session,
    load_session,
    post_message,
    session_exists,
)
from council.gateway.middleware.logging_config import setup_logging

from .install import INSTALL_TARGETS, available_targets

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="council",
        description="Multi-agent collaboration CLI tool",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("new", help="Create a new collaboration session")

    join = sub.add_parser("join", help="Join a session")
    join.add_argument("session_id", help="Session ID to join")
    join.add_argument(
        "-p", "--participant", help="Your participant name (prompted if omitted)"
    )

    leave = sub.add_parser("leave", help="Leave a session")
    leave.add_argument("session_id", help="Session ID to leave")
    leave.add_argument(
        "-p", "--participant", help="Your participant name (prompted if omitted)"
    )

    post = sub.add_parser("post", help="Post a message to the session")
    post.add_argument("session_id", help="Session ID to post to")
    post.add_argument("-p", "--participant", required=True, help="Participant name posting")
    post.add_argument(
        "--after", type=int, required=True, help="Only post if latest event is exactly N"
    )
    post.add_argument("-f", "--file", help="Read content from file instead of stdin")
    post.add_argument(
        "-n", "--next", help="Designate the next speaker (defaults to previous speaker)"
    )

    status = sub.add_parser("status", help="Display session state")
    status.add_argument("session_id", help="Session ID to check")
    status.add_argument("--after", type=int, default=0, help="Only show events after event N")
    status.add_argument(
        "--await",
        dest="await_turn",
        action="store_true",
        help="Block until new events and it's your turn (requires --participant)",
    )
    status.add_argument("-p", "--participant", help="Your participant name")
    status.add_argument("--timeout", type=float, help="Timeout in seconds for --await")

    watch = sub.add_parser("watch", help="Watch a session via web interface")
    watch.add_argument("-s", "--session", required=True, help="Session ID to watch")
    watch.add_argument("--host", help="Host to bind (default from COUNCIL_GATEWAY_HOST)")
    watch.add_argument("-p", "--port", type=int, help="Port to serve on")

    install = sub.add_parser("install", help="Install council integrations")
    install.add_argument("targets", nargs="*", help="Targets to install (e.g., claude)")

    return parser


def cmd_new(args: argparse.Namespace) -> int:
    session_id = generate_session_id()
    create_session(session_id)
    print(session_id)
    return 0


def prompt_for_name(prompt: str = "Enter your participant name: ") -> str:
    """未给出 --participant 时从 stdin 读取名称"""
    print(prompt, end="", flush=True)
    return sys.stdin.readline().strip()


def _participant_name(args: argparse.Namespace) -> str | None:
    name = args.participant or prompt_for_name()
    if not name:
        print("Error: participant name required", file=sys.stderr)
        return None
    return name


def cmd_join(args: argparse.Namespace) -> int:
    name = _participant_name(args)
    if name is None:
        return 1
    event_number = join_session(args.session_id, name)
    print(
        f"Joined session as event #{event_number}. "
        f"Use --after {event_number} for your first post."
    )
    return 0


def cmd_leave(args: argparse.Namespace) -> int:
    name = _participant_name(args)
    if name is None:
        return 1
    leave_session(args.session_id, name)
    print(f"Left session {args.session_id}.")
    return 0


def read_content(file: str | None) -> str:
    """从文件或 stdin 读取消息内容"""
    if file:
        return Path(file).read_text(encoding="utf-8")
    return sys.stdin.read()


def cmd_post(args: argparse.Namespace) -> int:
    content = read_content(args.file)
    event_number = post_message(
        args.session_id,
        args.participant,
        content,
        after_event_num=args.after,
        next_speaker=args.next,
    )
    print(f"Posted as event #{event_number}.")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    if args.await_turn:
        if not args.participant:
            print("Error: --await requires --participant", file=sys.stderr)
            return 1
        session = wait_for_turn(
            args.session_id,
            args.participant,
            after=args.after,
            timeout_s=args.timeout if args.timeout and args.timeout > 0 else None,
        )
    else:
        session = load_session(args.session_id)

    sys.stdout.write(format_status(session, args.after))
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    import uvicorn
    from council.gateway.config import load_gateway_config
    from council.gateway.main import create_app

    if not session_exists(args.session):
        raise SessionNotFoundError(args.session)

    config = load_gateway_config()
    host = args.host or config.host
    port = args.port or config.port

    print(f"Watching session at http://{host}:{port}/api/status?session={args.session}")
    uvicorn.run(create_app(), host=host, port=port)
    return 0


def cmd_install(args: argparse.Namespace) -> int:
    if not args.targets:
        print("Error: no targets specified", file=sys.stderr)
        print(f"Available targets: {available_targets()}", file=sys.stderr)
        return 1

    failed = False
    for target in args.targets:
        install = INSTALL_TARGETS.get(target)
        if install is None:
            print(f"Error: unknown target '{target}'", file=sys.stderr)
            failed = True
            continue

        try:
            dest = install()
        except (OSError, RuntimeError) as e:
            print(f"Error installing {target}: {e}", file=sys.stderr)
            failed = True
            continue

        print(f"Installed {target} skill to {dest}")

    return 1 if failed else 0


_COMMANDS = {
    "new": cmd_new,
    "join": cmd_join,
    "leave": cmd_leave,
    "post": cmd_post,
    "status": cmd_status,
    "watch": cmd_watch,
    "install": cmd_install,
}


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口，返回进程退出码"""
    setup_logging(default_level="WARNING")
    args = build_parser().parse_args(argv)

    try:
        return _COMMANDS[args.command](args)
    except CouncilError as e:
        log.debug("command_failed", command=args.command, code=e.code)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

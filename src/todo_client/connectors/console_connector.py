# src/todo_client/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

from ..cli.commands import registry as command_registry
from ..core.errors import Notice, NoticeLevel
from ..view.render import render_view

if TYPE_CHECKING:
    from ..cli.bootstrap import TodoApp

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """
    Console rendition of a blocking alert.

    Errors wait for Enter before the REPL continues (only when stdin is a TTY
    and confirmation is enabled); info notices are just printed.
    """

    def __init__(self, *, confirm: bool = True, out: TextIO | None = None) -> None:
        self._confirm = confirm
        self._out = out

    def notify(self, notice: Notice) -> None:
        out = self._out or sys.stdout
        tag = "ALERT" if notice.level == NoticeLevel.ERROR else "INFO"
        print(f"[{_ts_local()}] [{tag}] {notice.text()}", file=out, flush=True)

        if notice.level != NoticeLevel.ERROR or not self._confirm:
            return
        try:
            if sys.stdin.isatty():
                input("Press Enter to continue...")
        except (EOFError, KeyboardInterrupt):
            print(file=out)


def run_console_loop(app: TodoApp, runner: asyncio.Runner) -> None:
    """
    Read commands on the main thread and run each one on the runner's loop.

    Ctrl-C at the prompt or while a command is in flight ends the loop.
    """
    logger.info("Console connector started.")
    print(render_view(app.state))
    print(f"\n[{_ts_local()}] [CONSOLE] Use /help for commands. Use /exit to quit.\n", flush=True)

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = runner.run(command_registry.handle(app, user_input))
        except KeyboardInterrupt:
            logger.info("Command interrupted, exiting.")
            print()
            break
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list available commands."
        print(f"\n{reply}\n", flush=True)

    logger.info("Console connector finished.")

# src/todo_client/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the app, restores any persisted session, then
runs the console REPL. Input is read on the main thread; every command runs
on one asyncio.Runner so Ctrl-C reaches the process.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_app
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _console_level(settings) -> int:
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def _run(settings) -> None:
    with asyncio.Runner() as runner:
        app = create_app(ConsoleNotifier(confirm=settings.confirm_alerts), settings=settings)
        try:
            runner.run(app.session.restore())
            run_console_loop(app, runner)
        finally:
            runner.run(app.aclose())


def main() -> None:
    settings = get_settings()

    # TODO_LOG_LEVEL drives the console; the file log always keeps DEBUG.
    setup_logging(log_dir=settings.data_dir, console_level=_console_level(settings))

    logger.info("Starting %s...", settings.app_name)
    try:
        _run(settings)
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()

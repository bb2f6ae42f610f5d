# src/todo_client/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..core.models import FormMode
from ..view.render import render_view

if TYPE_CHECKING:
    from .bootstrap import TodoApp

CommandHandler = Callable[["TodoApp", list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, app: TodoApp, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(app, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()

NOT_LOGGED_IN = "You are not logged in. Use /login <username> <password>."


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


async def cmd_help(app: TodoApp, args: list[str]) -> str:
    return registry.build_help()


async def cmd_show(app: TodoApp, args: list[str]) -> str:
    return render_view(app.state)


async def cmd_status(app: TodoApp, args: list[str]) -> str:
    state = app.state
    settings = state.settings
    who = state.user.username if state.user is not None else "(not logged in)"
    busy = ", ".join(sorted(state.busy)) or "none"
    return (
        "Status:\n"
        f"  User: {who}\n"
        f"  Identity service: {getattr(settings, 'user_service_url', '?')}\n"
        f"  Task service: {getattr(settings, 'todo_service_url', '?')}\n"
        f"  Todos loaded: {len(state.todos)}\n"
        f"  In flight: {busy}"
    )


async def cmd_mode(app: TodoApp, args: list[str]) -> str:
    """
    /mode login     -> show the login form
    /mode register  -> show the registration form
    """
    if len(args) != 1 or args[0].lower() not in (FormMode.LOGIN, FormMode.REGISTER):
        return "Usage: /mode login | /mode register"
    app.session.switch_mode(FormMode(args[0].lower()))
    return render_view(app.state)


async def cmd_login(app: TodoApp, args: list[str]) -> str:
    state = app.state
    if state.is_authenticated:
        assert state.user is not None
        return f"Already logged in as {state.user.username}. Use /logout first."
    if len(args) != 2:
        return "Usage: /login <username> <password>"
    app.session.switch_mode(FormMode.LOGIN)
    await app.session.login(args[0], args[1])
    return render_view(state)


async def cmd_register(app: TodoApp, args: list[str]) -> str:
    if app.state.is_authenticated:
        return "Log out before registering a new account."
    if len(args) != 3:
        return "Usage: /register <username> <email> <password>"
    app.session.switch_mode(FormMode.REGISTER)
    await app.session.register(args[0], args[1], args[2])
    return render_view(app.state)


async def cmd_logout(app: TodoApp, args: list[str]) -> str:
    app.session.logout()
    return render_view(app.state)


async def cmd_add(app: TodoApp, args: list[str]) -> str:
    """
    /add <title>                  -> create a todo
    /add <title> | <description>  -> create a todo with a description
    """
    if not app.state.is_authenticated:
        return NOT_LOGGED_IN
    title, _, description = " ".join(args).partition("|")
    if not await app.todos.create(title.strip(), description.strip()):
        if not title.strip():
            return "Usage: /add <title> [| <description>]"
    return render_view(app.state)


async def _set_completed(app: TodoApp, args: list[str], completed: bool, usage: str) -> str:
    if not app.state.is_authenticated:
        return NOT_LOGGED_IN
    todo_id = _parse_id(args)
    if todo_id is None:
        return usage
    if app.state.index_of(todo_id) is None:
        return f"No todo with id {todo_id}."
    await app.todos.toggle_completion(todo_id, completed)
    return render_view(app.state)


async def cmd_done(app: TodoApp, args: list[str]) -> str:
    return await _set_completed(app, args, True, "Usage: /done <id>")


async def cmd_undo(app: TodoApp, args: list[str]) -> str:
    return await _set_completed(app, args, False, "Usage: /undo <id>")


async def cmd_rm(app: TodoApp, args: list[str]) -> str:
    if not app.state.is_authenticated:
        return NOT_LOGGED_IN
    todo_id = _parse_id(args)
    if todo_id is None:
        return "Usage: /rm <id>"
    if app.state.index_of(todo_id) is None:
        return f"No todo with id {todo_id}."
    await app.todos.delete(todo_id)
    return render_view(app.state)


async def cmd_refresh(app: TodoApp, args: list[str]) -> str:
    if not app.state.is_authenticated:
        return NOT_LOGGED_IN
    await app.todos.refresh()
    return render_view(app.state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Render the current screen.", aliases=["ls", "list"])
registry.register("status", cmd_status, help_text="Show session, service URLs and requests in flight.")
registry.register("mode", cmd_mode, help_text="Switch form: /mode login | /mode register.")
registry.register("login", cmd_login, help_text="Log in: /login <username> <password>.")
registry.register("register", cmd_register, help_text="Create an account: /register <username> <email> <password>.")
registry.register("logout", cmd_logout, help_text="Log out and forget the saved session.")
registry.register("add", cmd_add, help_text="Add a todo: /add <title> [| <description>].")
registry.register("done", cmd_done, help_text="Mark a todo completed: /done <id>.")
registry.register("undo", cmd_undo, help_text="Mark a todo not completed: /undo <id>.")
registry.register("rm", cmd_rm, help_text="Delete a todo: /rm <id>.", aliases=["delete"])
registry.register("refresh", cmd_refresh, help_text="Reload the todo list from the task service.")

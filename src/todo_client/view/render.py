# src/todo_client/view/render.py

"""Pure text rendering of AppState. No I/O, no mutation."""

from __future__ import annotations

from ..core.models import FormMode, Task
from ..core.state import AppState

EMPTY_LIST_TEXT = "No todos yet. Create your first todo above!"


def _tab(label: str, active: bool) -> str:
    return f"[{label}]" if active else f" {label} "


def _render_auth(state: AppState, title: str) -> list[str]:
    form = state.form
    login_mode = form.mode == FormMode.LOGIN
    lines = [
        title,
        f"{_tab('Login', login_mode)} {_tab('Register', not login_mode)}",
        "",
        f"  Username: {form.username}",
    ]
    if not login_mode:
        lines.append(f"  Email:    {form.email}")
    lines.append(f"  Password: {'*' * len(form.password)}")
    lines.append("")
    if login_mode:
        lines.append("Use /login <username> <password>, or /mode register.")
    else:
        lines.append("Use /register <username> <email> <password>, or /mode login.")
    return lines


def render_task(task: Task) -> list[str]:
    mark = "x" if task.completed else " "
    lines = [f"[{mark}] #{task.id} {task.title}"]
    if task.description:
        lines.append(f"      {task.description}")
    created = task.created_on()
    if created is not None:
        lines.append(f"      Created: {created.isoformat()}")
    return lines


def render_view(state: AppState) -> str:
    title = str(getattr(state.settings, "app_name", "DevOps Todo App"))

    if not state.is_authenticated:
        return "\n".join(_render_auth(state, title))

    assert state.user is not None
    lines = [
        f"{title} | Welcome, {state.user.username}!",
        "",
        "Add New Todo",
        f"  Title:       {state.draft.title}",
        f"  Description: {state.draft.description}",
        "",
    ]
    if not state.todos:
        lines.append(EMPTY_LIST_TEXT)
    for task in state.todos:
        lines.extend(render_task(task))
    return "\n".join(lines)

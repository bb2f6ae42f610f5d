# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit a real .env; the session database under TODO_DATA_DIR holds a bearer token.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "Title shown at the top of the screen (default: DevOps Todo App).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file under TODO_DATA_DIR always keeps DEBUG.",
    # Remote services
    "TODO_USER_SERVICE_URL": (
        "Identity service base URL (default: http://localhost:8001). "
        "Falls back to NEXT_PUBLIC_USER_SERVICE_URL, then USER_SERVICE_URL."
    ),
    "TODO_TODO_SERVICE_URL": (
        "Task service base URL (default: http://localhost:8002). "
        "Falls back to NEXT_PUBLIC_TODO_SERVICE_URL, then TODO_SERVICE_URL."
    ),
    "TODO_USER_ME_PATH": (
        "Optional identity endpoint returning the logged-in user (e.g. /me). "
        "Empty => the user record is built locally from the username."
    ),
    "TODO_HTTP_TIMEOUT_SECONDS": "Per-request timeout (default: 30; 0 disables).",
    # Console
    "TODO_CONFIRM_ALERTS": "Wait for Enter after an error alert (true/false, default: true).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo).",
    "TODO_SESSION_DB_PATH": "Session key-value SQLite path (default: <data_dir>/session.sqlite3).",
}

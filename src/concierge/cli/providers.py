"""Provider factory functions for CLI.

Centralizes creation of the credential store, gateway and session from
environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path
from typing import Any

from rich.console import Console

from ..config import DEFAULT_STORE_BACKEND, DEFAULT_STORE_PATH, LogLevel
from ..credentials import CredentialStore, create_key_value_store
from ..gateway import CompletionGateway
from ..session import PresentationSink, SessionController

# Default console for output
_console = Console()


def get_credential_store(ephemeral: bool = False) -> CredentialStore:
    """Create the credential store from environment variables.

    Args:
        ephemeral: Keep the key in memory only, ignoring the environment

    Environment variables:
        CONCIERGE_STORE: Backend type, sqlite or memory (default: sqlite)
        CONCIERGE_STORE_PATH: SQLite file (default: ~/.concierge/store.db)
    """
    backend = "memory" if ephemeral else os.getenv("CONCIERGE_STORE", DEFAULT_STORE_BACKEND).lower()
    config: dict[str, Any] = {}
    if backend == "sqlite":
        config["path"] = Path(os.getenv("CONCIERGE_STORE_PATH", str(DEFAULT_STORE_PATH)))
    return CredentialStore(create_key_value_store(backend, **config))


def get_gateway() -> CompletionGateway:
    """Create the completion gateway.

    Environment variables:
        OPENAI_BASE_URL: Optional API base URL (e.g. a proxy)
    """
    return CompletionGateway(base_url=os.getenv("OPENAI_BASE_URL") or None)


def get_session(
    ephemeral: bool = False,
    sink: PresentationSink | None = None,
) -> SessionController:
    """Create a session controller wired to the default store and gateway."""
    return SessionController(
        credentials=get_credential_store(ephemeral=ephemeral),
        gateway=get_gateway(),
        sink=sink,
    )


def get_log_level(log_level: str | None) -> str | None:
    """Resolve the log level from the flag or CONCIERGE_LOG_LEVEL."""
    return log_level or os.getenv("CONCIERGE_LOG_LEVEL") or None


def make_console_debug_callback(level: str, console: Console | None = None) -> Any:
    """Create a debug callback that prints to a Rich console.

    Args:
        level: Minimum level to print (debug/info/warning/error)
        console: Optional Rich console for output

    Returns:
        Callable(level: str, component: str, message: str)
    """
    con = console or _console
    threshold = LogLevel.from_string(level)
    colors = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def _callback(msg_level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(msg_level)
        if numeric < threshold:
            return
        con.print(
            f"{LogLevel.name(numeric):<5} [{component}] {message}",
            style=colors.get(numeric, "white"),
            markup=False,
            highlight=False,
        )

    return _callback

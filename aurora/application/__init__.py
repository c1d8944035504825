"""Application services."""

from .console import ConsoleService, get_console_service, reset_console_state

__all__ = [
    "ConsoleService",
    "get_console_service",
    "reset_console_state",
]

"""Infrastructure layer exports."""

from .console import STARTER_TASKS, WELCOME_MESSAGE, ConsoleRepository, InMemoryConsoleRepository

__all__ = [
    "ConsoleRepository",
    "InMemoryConsoleRepository",
    "STARTER_TASKS",
    "WELCOME_MESSAGE",
]

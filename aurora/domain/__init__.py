"""Domain layer definitions."""

from .console import MESSAGE_LOG_LIMIT, ConsoleState, ConversationLog

__all__ = [
    "MESSAGE_LOG_LIMIT",
    "ConsoleState",
    "ConversationLog",
]

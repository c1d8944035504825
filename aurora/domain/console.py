"""Domain entities for the single operator console."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from aurora.core.schema import AssistantMessage, CatalogOutputRow, Task

MESSAGE_LOG_LIMIT = 9


class ConversationLog:
    """Bounded log keeping only the most recent messages."""

    def __init__(self, entries: Iterable[AssistantMessage] = (), limit: int = MESSAGE_LOG_LIMIT) -> None:
        self._entries: deque[AssistantMessage] = deque(entries, maxlen=limit)

    def append(self, message: AssistantMessage) -> None:
        self._entries.append(message)

    def __iter__(self) -> Iterator[AssistantMessage]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(slots=True)
class ConsoleState:
    """Everything the console holds in memory for the operator."""

    tasks: list[Task] = field(default_factory=list)
    raw_catalog: str = ""
    selected_marketplace: str = "amazon"
    catalog_rows: list[CatalogOutputRow] = field(default_factory=list)
    messages: ConversationLog = field(default_factory=ConversationLog)

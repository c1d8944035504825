"""Infrastructure layer for console state."""
from __future__ import annotations

from typing import Protocol

from aurora.core.identifiers import new_id, now_ms
from aurora.core.schema import AssistantMessage, CatalogOutputRow, Task
from aurora.domain import ConsoleState

WELCOME_MESSAGE = (
    "Aurora online. Ask me to capture priorities, update task status, or transform your raw "
    "catalog data for Amazon, Flipkart, Meesho, or Myntra."
)

STARTER_TASKS: list[tuple[str, str]] = [
    ("Reconcile Amazon apparel inventory", "pending"),
    ("Draft Flipkart deal of the day copy", "in-progress"),
]


class ConsoleRepository(Protocol):
    """Storage contract for the console state."""

    def get_state(self) -> ConsoleState: ...

    def save_tasks(self, tasks: list[Task]) -> None: ...

    def save_catalog_rows(self, rows: list[CatalogOutputRow]) -> None: ...

    def set_raw_catalog(self, text: str) -> None: ...

    def set_marketplace(self, marketplace: str) -> None: ...

    def append_message(self, message: AssistantMessage) -> None: ...

    def list_messages(self) -> list[AssistantMessage]: ...

    def reset(self) -> None: ...


class InMemoryConsoleRepository:
    """In-memory repository; state is lost when the process exits."""

    def __init__(self, *, seed: bool = True) -> None:
        self._seed = seed
        self._state = self._initial_state()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _initial_state(self) -> ConsoleState:
        state = ConsoleState()
        if self._seed:
            state.tasks = [
                Task(id=new_id(), title=title, status=status, source="manual")
                for title, status in STARTER_TASKS
            ]
            state.messages.append(
                AssistantMessage(id=new_id(), role="assistant", content=WELCOME_MESSAGE, timestamp=now_ms())
            )
        return state

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------
    def get_state(self) -> ConsoleState:
        return self._state

    def save_tasks(self, tasks: list[Task]) -> None:
        self._state.tasks = list(tasks)

    def save_catalog_rows(self, rows: list[CatalogOutputRow]) -> None:
        self._state.catalog_rows = list(rows)

    def set_raw_catalog(self, text: str) -> None:
        self._state.raw_catalog = text

    def set_marketplace(self, marketplace: str) -> None:
        self._state.selected_marketplace = marketplace

    def append_message(self, message: AssistantMessage) -> None:
        self._state.messages.append(message)

    def list_messages(self) -> list[AssistantMessage]:
        return list(self._state.messages)

    def reset(self) -> None:
        self._state = self._initial_state()

"""Application service layer for the operator console."""
from __future__ import annotations

import logging

from aurora.core.identifiers import new_id, now_ms
from aurora.core.interpreter import interpret
from aurora.core.marketplaces import MARKETPLACE_PROFILES, is_marketplace
from aurora.core.schema import TASK_STATUSES, AssistantMessage, CommandContext, CommandOutcome, Task, TemplatePreview
from aurora.exporters.marketplace_csv import export_filename, export_to_csv
from aurora.extractors.catalog_sheet import SAMPLE_CATALOG
from aurora.extractors.template_sheet import parse_template_file
from aurora.infrastructure import ConsoleRepository, InMemoryConsoleRepository

logger = logging.getLogger(__name__)

GENERATE_COMMAND = "generate catalog"


class ConsoleService:
    """Single writer for the console state; every mutation goes through here."""

    def __init__(self, repository: ConsoleRepository) -> None:
        self._repository = repository

    # ------------------------------------------------------------------
    # commands
    # ------------------------------------------------------------------
    def build_context(self) -> CommandContext:
        state = self._repository.get_state()
        return CommandContext(
            tasks=list(state.tasks),
            raw_catalog=state.raw_catalog,
            catalog_rows=list(state.catalog_rows),
            selected_marketplace=state.selected_marketplace,
        )

    def run_command(self, text: str, *, label: str | None = None) -> CommandOutcome:
        trimmed = (text or "").strip()
        if not trimmed:
            raise ValueError("command text is required")

        outcome = interpret(trimmed, self.build_context())
        self._repository.save_tasks(outcome.tasks)
        self._repository.save_catalog_rows(outcome.catalog_rows)
        self._repository.append_message(
            AssistantMessage(id=new_id(), role="user", content=label or trimmed, timestamp=now_ms())
        )
        self._repository.append_message(outcome.message)
        logger.info("Command handled as %s (announce=%s)", outcome.intent, outcome.announce)
        return outcome

    # ------------------------------------------------------------------
    # tasks
    # ------------------------------------------------------------------
    def list_tasks(self) -> list[Task]:
        return list(self._repository.get_state().tasks)

    def add_manual_task(self, title: str) -> Task:
        trimmed = (title or "").strip()
        if not trimmed:
            raise ValueError("title is required")
        task = Task(id=new_id(), title=trimmed, status="pending", source="manual")
        self._repository.save_tasks([*self.list_tasks(), task])
        return task

    def update_task_status(self, task_id: str, status: str) -> Task:
        if status not in TASK_STATUSES:
            raise ValueError(f"status must be one of {', '.join(TASK_STATUSES)}")
        tasks = self.list_tasks()
        for index, task in enumerate(tasks):
            if task.id == task_id:
                updated = task.model_copy(update={"status": status})
                tasks[index] = updated
                self._repository.save_tasks(tasks)
                return updated
        raise KeyError(task_id)

    # ------------------------------------------------------------------
    # catalog
    # ------------------------------------------------------------------
    def set_raw_catalog(self, text: str) -> None:
        self._repository.set_raw_catalog(text or "")

    def load_sample_catalog(self) -> str:
        self._repository.set_raw_catalog(SAMPLE_CATALOG)
        return SAMPLE_CATALOG

    def select_marketplace(self, marketplace: str) -> None:
        if not is_marketplace(marketplace):
            raise ValueError(f"marketplace must be one of {', '.join(MARKETPLACE_PROFILES)}")
        self._repository.set_marketplace(marketplace)
        self._repository.save_catalog_rows([])

    def generate_catalog(self) -> CommandOutcome:
        return self.run_command(GENERATE_COMMAND, label="Generate catalog")

    def export_catalog(self) -> tuple[str, str]:
        state = self._repository.get_state()
        if not state.catalog_rows:
            raise ValueError("no generated listings to export")
        filename = export_filename(state.selected_marketplace, now_ms())
        return filename, export_to_csv(state.catalog_rows)

    def preview_template(self, filename: str, payload: bytes) -> TemplatePreview | None:
        return parse_template_file(filename, payload)

    # ------------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------------
    def list_messages(self) -> list[AssistantMessage]:
        return self._repository.list_messages()

    def snapshot(self) -> dict[str, object]:
        state = self._repository.get_state()
        return {
            "tasks": [task.model_dump() for task in state.tasks],
            "raw_catalog": state.raw_catalog,
            "selected_marketplace": state.selected_marketplace,
            "catalog_rows": [row.model_dump(mode="json") for row in state.catalog_rows],
            "messages": [message.model_dump() for message in state.messages],
        }

    # ------------------------------------------------------------------
    # testing helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._repository.reset()


_repository = InMemoryConsoleRepository()
_service = ConsoleService(_repository)


def get_console_service() -> ConsoleService:
    """Return the singleton console service for the process."""

    return _service


def reset_console_state() -> None:
    """Reset the in-memory console (used in tests)."""

    _service.reset()

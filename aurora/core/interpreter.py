"""Keyword driven interpreter for operator commands.

Every command is matched against an ordered list of intents and the first
match wins.  Order matters because the vocabulary overlaps (``"show task"``
versus ``"mark task"``).  Handlers receive a read-only
:class:`~aurora.core.schema.CommandContext` and return a fresh
:class:`~aurora.core.schema.CommandOutcome`; the interpreter itself keeps no
state between calls and never raises.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from aurora.core.catalog import render_for_marketplace
from aurora.core.identifiers import new_id, now_ms
from aurora.core.marketplaces import get_profile
from aurora.core.schema import AssistantMessage, CatalogOutputRow, CommandContext, CommandOutcome, Task
from aurora.extractors.catalog_sheet import parse_catalog_sheet

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Here's what I can do:\n"
    "- \"Add task <title>\" to capture a new priority\n"
    "- \"Mark task <title> as done / in progress / pending\" to update status\n"
    "- \"Show my tasks\" to hear your task list\n"
    "- \"Generate catalog\" to turn your raw product data into listings for the selected marketplace"
)

FALLBACK_TEXT = "I didn't understand that. Try saying \"help\" to hear what I can do."

STATUS_LABELS = {
    "pending": "Pending",
    "in-progress": "In progress",
    "completed": "Completed",
}

STATUS_SYNONYMS: dict[str, tuple[str, ...]] = {
    "completed": ("done", "complete", "completed", "finished", "finish"),
    "in-progress": ("progress", "in progress", "in-progress", "started", "start", "ongoing", "working"),
    "pending": ("pending", "todo", "to do", "to-do", "not started", "open"),
}

HELP_PATTERN = re.compile(r"\bhelp\b|^\s*(?:what can you do\b|commands?\s*[?.!]*$)", re.I)
ADD_TASK_PATTERN = re.compile(r"\b(?:add|create|new)\s+(?:a\s+|new\s+)?task\b", re.I)
UPDATE_TRIGGER_PATTERN = re.compile(r"\b(?:mark|set|update|move|change)\s+(?:the\s+|my\s+)?tasks?\b", re.I)
UPDATE_BODY_PATTERNS = (
    re.compile(r"^(?P<fragment>.+)\s+as\s+(?P<status>.+)$", re.I),
    re.compile(r"^(?P<fragment>.+)\s+to\s+(?P<status>.+)$", re.I),
)
LIST_VERB_PATTERN = re.compile(r"\b(?:show|list|read|display|what are)\b", re.I)
TASK_WORD_PATTERN = re.compile(r"\btasks?\b", re.I)
GENERATE_PATTERN = re.compile(r"\bgenerate\b", re.I)
CATALOG_WORD_PATTERN = re.compile(r"\b(?:catalog|catalogue|listings?)\b", re.I)

_TRAILING_PUNCTUATION = " \t.!?,;:"


@dataclass(frozen=True)
class Intent:
    name: str
    predicate: Callable[[str], bool]
    handler: Callable[[str, CommandContext], CommandOutcome]


def _reply(content: str) -> AssistantMessage:
    return AssistantMessage(id=new_id(), role="assistant", content=content, timestamp=now_ms())


def _outcome(
    intent: str,
    context: CommandContext,
    content: str,
    *,
    tasks: list[Task] | None = None,
    catalog_rows: list[CatalogOutputRow] | None = None,
    announce: bool = True,
) -> CommandOutcome:
    return CommandOutcome(
        intent=intent,
        tasks=list(context.tasks) if tasks is None else tasks,
        catalog_rows=list(context.catalog_rows) if catalog_rows is None else catalog_rows,
        message=_reply(content),
        announce=announce,
    )


def resolve_status(phrase: str) -> str | None:
    """Map a spoken status word to a task status, ``None`` when unknown."""

    normalized = " ".join(phrase.strip(_TRAILING_PUNCTUATION).lower().split())
    if normalized.startswith("marked "):
        normalized = normalized[len("marked "):]
    for status, synonyms in STATUS_SYNONYMS.items():
        if normalized in synonyms:
            return status
    # phrases first so "not started yet" never falls through to "started"
    for status, synonyms in STATUS_SYNONYMS.items():
        if any(re.search(rf"\b{re.escape(synonym)}\b", normalized) for synonym in synonyms if " " in synonym):
            return status
    words = set(re.split(r"[\s-]+", normalized))
    for status in ("completed", "in-progress", "pending"):
        if any(synonym in words for synonym in STATUS_SYNONYMS[status] if " " not in synonym):
            return status
    return None


# ----------------------------------------------------------------------
# handlers
# ----------------------------------------------------------------------
def _handle_help(text: str, context: CommandContext) -> CommandOutcome:
    return _outcome("help", context, HELP_TEXT)


def _handle_add_task(text: str, context: CommandContext) -> CommandOutcome:
    match = ADD_TASK_PATTERN.search(text)
    remainder = text[match.end():] if match else ""
    title = remainder.lstrip(" :-,").strip()
    if not title:
        return _outcome("add_task", context, "Please tell me the task title, for example \"add task call the courier\".")

    existing = {task.id for task in context.tasks}
    task_id = new_id()
    while task_id in existing:
        task_id = new_id()
    task = Task(id=task_id, title=title, status="pending", source="voice")
    logger.info("Adding task %s from command", task.id)
    return _outcome("add_task", context, f"Added task \"{title}\".", tasks=[*context.tasks, task])


def _handle_update_status(text: str, context: CommandContext) -> CommandOutcome:
    trigger = UPDATE_TRIGGER_PATTERN.search(text)
    body = text[trigger.end():].strip(_TRAILING_PUNCTUATION) if trigger else ""
    match = next((found for pattern in UPDATE_BODY_PATTERNS if (found := pattern.match(body))), None)
    if match is None:
        return _outcome(
            "update_status",
            context,
            "Tell me which task and the new status, for example \"mark task inventory as done\".",
        )

    fragment = match.group("fragment").strip().lower()
    status = resolve_status(match.group("status"))
    if status is None:
        return _outcome(
            "update_status",
            context,
            f"I can mark tasks as pending, in progress, or completed, not \"{match.group('status').strip()}\".",
        )

    matched = [task for task in context.tasks if fragment in task.title.lower()]
    if not matched:
        return _outcome("update_status", context, f"I couldn't find a task matching \"{match.group('fragment').strip()}\".")

    matched_ids = {task.id for task in matched}
    tasks = [task.model_copy(update={"status": status}) if task.id in matched_ids else task for task in context.tasks]
    titles = ", ".join(f"\"{task.title}\"" for task in matched)
    logger.info("Updated %d task(s) to %s", len(matched), status)
    return _outcome("update_status", context, f"Marked {titles} as {STATUS_LABELS[status].lower()}.", tasks=tasks)


def _handle_list_tasks(text: str, context: CommandContext) -> CommandOutcome:
    if not context.tasks:
        return _outcome("list_tasks", context, "You have no tasks yet.", announce=False)
    noun = "task" if len(context.tasks) == 1 else "tasks"
    lines = [f"You have {len(context.tasks)} {noun}:"]
    for index, task in enumerate(context.tasks, start=1):
        lines.append(f"{index}. {task.title} ({STATUS_LABELS[task.status]})")
    return _outcome("list_tasks", context, "\n".join(lines), announce=False)


def _handle_generate_catalog(text: str, context: CommandContext) -> CommandOutcome:
    sheet = parse_catalog_sheet(context.raw_catalog)
    if sheet is None:
        return _outcome(
            "generate_catalog",
            context,
            "I couldn't find any valid product lines. Paste rows as "
            "name | sku | price | category | stock | description | tags and try again.",
        )

    marketplace = context.selected_marketplace
    rows = render_for_marketplace(sheet.rows, marketplace)
    name = get_profile(marketplace).name
    noun = "listing" if len(rows) == 1 else "listings"
    logger.info("Generated %d %s rows", len(rows), marketplace)
    return _outcome("generate_catalog", context, f"Generated {len(rows)} {name} {noun}.", catalog_rows=rows)


def _handle_fallback(text: str, context: CommandContext) -> CommandOutcome:
    return _outcome("fallback", context, FALLBACK_TEXT)


def _is_help(text: str) -> bool:
    return bool(HELP_PATTERN.search(text))


def _is_add_task(text: str) -> bool:
    return bool(ADD_TASK_PATTERN.search(text))


def _is_update_status(text: str) -> bool:
    return bool(UPDATE_TRIGGER_PATTERN.search(text))


def _is_list_tasks(text: str) -> bool:
    return bool(LIST_VERB_PATTERN.search(text) and TASK_WORD_PATTERN.search(text))


def _is_generate_catalog(text: str) -> bool:
    return bool(GENERATE_PATTERN.search(text) and CATALOG_WORD_PATTERN.search(text))


INTENTS: tuple[Intent, ...] = (
    Intent("help", _is_help, _handle_help),
    Intent("add_task", _is_add_task, _handle_add_task),
    Intent("update_status", _is_update_status, _handle_update_status),
    Intent("list_tasks", _is_list_tasks, _handle_list_tasks),
    Intent("generate_catalog", _is_generate_catalog, _handle_generate_catalog),
)

FALLBACK_INTENT = Intent("fallback", lambda text: True, _handle_fallback)


def match_intent(text: str) -> Intent:
    for intent in INTENTS:
        if intent.predicate(text):
            return intent
    return FALLBACK_INTENT


def interpret(text: str, context: CommandContext) -> CommandOutcome:
    text = text.strip()
    intent = match_intent(text)
    logger.debug("Command %r matched intent %s", text[:80], intent.name)
    try:
        return intent.handler(text, context)
    except Exception:  # handlers must never break the console loop
        logger.exception("Intent %s failed for command %r", intent.name, text[:80])
        return _outcome(intent.name, context, "Something went wrong while handling that command. Nothing was changed.")

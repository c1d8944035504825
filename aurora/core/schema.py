from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskSource = Literal["manual", "voice", "catalog"]
MessageRole = Literal["assistant", "user", "system"]
MarketplaceKey = Literal["amazon", "flipkart", "meesho", "myntra"]

TASK_STATUSES: tuple[str, ...] = ("pending", "in-progress", "completed")
MARKETPLACE_KEYS: tuple[str, ...] = ("amazon", "flipkart", "meesho", "myntra")


class Task(BaseModel):
    id: str
    title: str
    status: TaskStatus = "pending"
    source: TaskSource = "manual"


class AssistantMessage(BaseModel):
    id: str
    role: MessageRole
    content: str
    timestamp: int


class MarketplaceProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    title_max_length: int = Field(gt=0)
    description_template: str
    keyword_hint: str = ""


class ParsedCatalogRecord(BaseModel):
    name: str
    sku: str
    price: Decimal = Decimal("0")
    category: str = ""
    stock: int = 0
    description: str = ""
    tags: list[str] = Field(default_factory=list)


class CatalogSheet(BaseModel):
    headers: list[str]
    rows: list[ParsedCatalogRecord]


class CatalogOutputRow(BaseModel):
    sku: str
    platform: MarketplaceKey
    title: str
    description: str
    keywords: list[str] = Field(default_factory=list)
    price: Decimal = Decimal("0")
    stock: int = 0


class TemplatePreview(BaseModel):
    headers: list[str]
    rows: list[dict[str, str]] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)


class CommandContext(BaseModel):
    tasks: list[Task] = Field(default_factory=list)
    raw_catalog: str = ""
    catalog_rows: list[CatalogOutputRow] = Field(default_factory=list)
    selected_marketplace: MarketplaceKey = "amazon"


class CommandOutcome(BaseModel):
    intent: str
    tasks: list[Task]
    catalog_rows: list[CatalogOutputRow]
    message: AssistantMessage
    announce: bool = True

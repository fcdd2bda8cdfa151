"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from skytracker.config import DEFAULT_SHARE_TITLE, DEFAULT_SHARE_DESCRIPTION


class HealthResponse(BaseModel):
    status: str
    items: int
    records: int
    views: int
    elements: int


class ElementsResponse(BaseModel):
    elements: list[str]


class DashboardStats(BaseModel):
    total: int
    have: int
    need: int
    forTrade: int
    totalValue: float


class FieldUpdateRequest(BaseModel):
    field: str  # "have", "need", "forTrade", "count", "value", "notes"
    value: Any = None


class SheetImportRequest(BaseModel):
    url: str


class ShareCreateRequest(BaseModel):
    title: str = DEFAULT_SHARE_TITLE
    description: str = DEFAULT_SHARE_DESCRIPTION
    show_values: bool = False
    selected_ids: list[str] = Field(default_factory=list)
    select_owned: bool = False  # ignore selected_ids and share every owned item


class ShareItem(BaseModel):
    id: str
    name: str
    element: str
    category: str
    imageUrl: str
    count: int
    value: Optional[float] = None


class ShareResponse(BaseModel):
    title: str
    description: str
    showValues: bool
    skylanders: list[ShareItem]
    link: str


class SavedViewResponse(BaseModel):
    id: str
    title: str
    description: str
    showValues: bool
    selectedIds: list[str]
    createdAt: str

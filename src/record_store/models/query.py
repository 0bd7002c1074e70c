"""Query models for the record pipeline."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from record_store.models.record import HeaderField, Record


class SortOrder(str, Enum):
    """Sort order options."""

    ASC = "asc"
    DESC = "desc"


class RecordQuery(BaseModel):
    """Search, sort and pagination parameters for a list request."""

    keyword: Optional[str] = Field(default=None, description="Case-insensitive substring matched against every field")
    sort_key: Optional[str] = Field(default=None, description="Field to sort on")
    sort_order: Optional[str] = Field(default=None, description="'asc' or 'desc'; anything else keeps the current order")
    page: int = Field(default=1, description="1-based page number")
    limit: int = Field(default=10, description="Records per page")


class Page(BaseModel):
    """One page of records plus pagination metadata."""

    items: List[Record]
    total: int
    page: int
    limit: int


class RecordPage(Page):
    """A page of records with the dataset's header descriptor."""

    headers: List[HeaderField]

"""Record model for the record store."""

import json
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, Field

ID_FIELD = "Cmdb_id"

Record = Dict[str, str]


class HeaderField(BaseModel):
    """Column key paired with its display label."""

    key: str
    label: str


class RecordDetail(BaseModel):
    """A single record together with the header labels needed to edit it."""

    record: Record
    headers: Dict[str, str]
    non_editable_headers: List[str] = Field(default_factory=lambda: [ID_FIELD])


def normalize_value(value: Any) -> str:
    """Convert an inbound JSON value to the text stored in its cell.

    None becomes an empty string, booleans are lower-case, whole floats drop
    their fraction and nested objects or arrays are stored as JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def normalize_data(data: Mapping[str, Any]) -> Record:
    """Normalize caller-supplied field values to strings."""
    return {str(key): normalize_value(value) for key, value in data.items()}

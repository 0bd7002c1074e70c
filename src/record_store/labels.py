"""Header key to display label helpers."""

from typing import Dict, List

from record_store.models.record import HeaderField


def to_label(key: str) -> str:
    """Turn ``start_date`` into ``Start Date``."""
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def header_fields(headers: List[str]) -> List[HeaderField]:
    return [HeaderField(key=key, label=to_label(key)) for key in headers]


def header_labels(headers: List[str]) -> Dict[str, str]:
    return {key: to_label(key) for key in headers}

"""Models package for record store."""

from record_store.models.dataset import Dataset
from record_store.models.query import Page, RecordPage, RecordQuery, SortOrder
from record_store.models.record import ID_FIELD, HeaderField, Record, RecordDetail

__all__ = [
    "Dataset",
    "Record",
    "RecordDetail",
    "HeaderField",
    "ID_FIELD",
    "Page",
    "RecordPage",
    "RecordQuery",
    "SortOrder",
]

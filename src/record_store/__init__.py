"""Record store package."""

from record_store.dataset_manager import FileRecordStore, RecordStore
from record_store.exceptions import (
    DatasetError,
    DatasetNotFoundError,
    ParseError,
    RecordError,
    RecordNotFoundError,
    RecordStoreError,
    StorageError,
    ValidationError,
)
from record_store.models import Dataset, Record, RecordDetail, RecordPage, RecordQuery

__all__ = [
    # Main classes
    "RecordStore",
    "FileRecordStore",
    # Models
    "Dataset",
    "Record",
    "RecordDetail",
    "RecordPage",
    "RecordQuery",
    # Exceptions
    "RecordStoreError",
    "ValidationError",
    "DatasetError",
    "DatasetNotFoundError",
    "RecordError",
    "RecordNotFoundError",
    "ParseError",
    "StorageError",
]

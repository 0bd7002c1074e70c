"""API dependencies."""

from config import settings
from record_store.dataset_manager import FileRecordStore, RecordStore


def get_record_store() -> RecordStore:
    """Dependency for the record store backing every request."""
    return FileRecordStore(settings.uploads_dir, lock_timeout=settings.lock_timeout_seconds)

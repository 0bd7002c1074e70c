"""Application settings."""

from pydantic_settings import BaseSettings

from constants import (
    API_PREFIX,
    DEFAULT_DATASET,
    LOCK_TIMEOUT_SECONDS,
    LOGGING_LEVEL,
    UPLOADS_DIR,
)


class Settings(BaseSettings):
    """Spreadsheet CRUD API settings."""

    # API settings
    api_title: str = "Spreadsheet CRUD API"
    api_version: str = "1.0.0"
    api_description: str = "Search, sort, paginate and edit records stored in spreadsheet files"
    api_prefix: str = API_PREFIX

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Storage settings
    uploads_dir: str = UPLOADS_DIR
    default_dataset: str = DEFAULT_DATASET
    lock_timeout_seconds: float = LOCK_TIMEOUT_SECONDS

    # Logging
    logging_level: str = LOGGING_LEVEL


settings = Settings()

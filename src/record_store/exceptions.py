"""Custom exceptions for the record store module."""


class RecordStoreError(Exception):
    """Base exception for record store errors."""

    pass


class ValidationError(RecordStoreError):
    """Raised when a required parameter is missing or malformed."""

    pass


class DatasetError(RecordStoreError):
    """Base exception for dataset-related errors."""

    pass


class DatasetNotFoundError(DatasetError):
    """Raised when a dataset has no backing file."""

    pass


class RecordError(RecordStoreError):
    """Base exception for record-related errors."""

    pass


class RecordNotFoundError(RecordError):
    """Raised when a record is not found."""

    pass


class ParseError(RecordStoreError):
    """Raised when a spreadsheet cannot be parsed."""

    pass


class StorageError(RecordStoreError):
    """Raised when reading or writing a dataset file fails."""

    pass

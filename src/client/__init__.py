"""HTTP client package for the spreadsheet CRUD API."""

from client.api_client import ApiError, CrudApiClient

__all__ = ["ApiError", "CrudApiClient"]

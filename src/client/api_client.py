"""Async client for the spreadsheet CRUD API.

Every call resolves to a dictionary. Successful responses become
``{"success": True, **payload}``; HTTP errors, transport failures and unreadable
bodies become ``{"success": False, "message": ...}`` so callers branch on one shape.
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from utils.logging import logger


class ApiError(Exception):
    """Raised internally when the API answers with a non-success status."""

    pass


class CrudApiClient:
    """Client for the ``/crud`` and ``/download`` endpoints."""

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def _request(self, method: str, endpoint: str, params: Dict[str, Any], json: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.request(method, f"{self.api_prefix}{endpoint}", params=params, json=json)
            return _handle_response(response)
        except (httpx.HTTPError, ApiError, ValueError) as e:
            return _handle_error(e)

    async def fetch_all(
        self,
        file_name: str,
        page: int = 1,
        limit: int = 10,
        keyword: str = "",
        sort_key: str = "",
        sort_order: str = "asc",
    ) -> Dict[str, Any]:
        """Fetch one page of records with search and sorting applied."""
        if not file_name:
            raise ValueError("file_name is required for fetch_all")

        params = {
            "fileName": file_name,
            "page": page,
            "limit": limit,
            "keyword": keyword,
            "sortKey": sort_key,
            "sortOrder": sort_order,
        }
        return await self._request("GET", "/crud", params)

    async def fetch_by_id(self, file_name: str, record_id: str) -> Dict[str, Any]:
        """Fetch a single record by its Cmdb_id."""
        if not file_name or not record_id:
            raise ValueError("file_name and record_id are required for fetch_by_id")
        return await self._request("GET", "/crud", {"fileName": file_name, "Cmdb_id": record_id})

    async def create(self, file_name: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a record; the server assigns its Cmdb_id."""
        if not file_name or data is None:
            raise ValueError("file_name and data are required for create")
        return await self._request("POST", "/crud", {"fileName": file_name}, json=data)

    async def update(self, file_name: str, record_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Update a record by its Cmdb_id."""
        if not file_name or not record_id or data is None:
            raise ValueError("file_name, record_id and data are required for update")
        return await self._request("PUT", "/crud", {"fileName": file_name, "Cmdb_id": record_id}, json=data)

    async def delete(self, file_name: str, record_id: str) -> Dict[str, Any]:
        """Delete a record by its Cmdb_id."""
        if not file_name or not record_id:
            raise ValueError("file_name and record_id are required for delete")
        return await self._request("DELETE", "/crud", {"fileName": file_name, "Cmdb_id": record_id})

    async def download(self, file_name: str) -> Dict[str, Any]:
        """Download the dataset file.

        Returns ``{"success": True, "filename": ..., "content": bytes}`` on success.
        """
        if not file_name:
            raise ValueError("file_name is required for download")
        try:
            async with self._client() as client:
                response = await client.get(f"{self.api_prefix}/download", params={"fileName": file_name})
            if not response.is_success:
                raise ApiError(_error_message(response))
            return {"success": True, "filename": f"{file_name}.xlsx", "content": response.content}
        except (httpx.HTTPError, ApiError) as e:
            return _handle_error(e)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase or "An unknown error occurred"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "An unknown error occurred"


def _handle_response(response: httpx.Response) -> Dict[str, Any]:
    """Parse a successful response or raise ApiError with the server's message."""
    if response.is_success:
        return {**response.json(), "success": True}
    raise ApiError(_error_message(response))


def _handle_error(error: Exception) -> Dict[str, Any]:
    logger.error(f"API request failed: {str(error)}")
    return {"success": False, "message": str(error) or "Network error occurred"}

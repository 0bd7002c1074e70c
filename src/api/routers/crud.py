"""CRUD router for dataset records."""

from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from api.dependencies import get_record_store
from api.errors import method_not_allowed, status_for, unsupported_methods
from api.models import (
    ERROR_RESPONSES,
    RecordCreatedResponse,
    RecordDeletedResponse,
    RecordListResponse,
    RecordResponse,
    RecordUpdatedResponse,
)
from config import settings
from record_store.dataset_manager import RecordStore
from record_store.exceptions import RecordStoreError
from record_store.models import ID_FIELD, RecordQuery
from utils.logging import logger

router = APIRouter(tags=["crud"], responses=ERROR_RESPONSES)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE"]


def _require_file_name(file_name: str) -> str:
    if not file_name or not file_name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing fileName parameter")
    return file_name


def _require_record_id(record_id: Optional[str]) -> str:
    if not record_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Missing {ID_FIELD} parameter")
    return record_id


def _store_error(e: RecordStoreError, action: str) -> HTTPException:
    status_code = status_for(e)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Failed to {action}: {str(e)}")
    else:
        logger.warning(f"Failed to {action}: {str(e)}")
    return HTTPException(status_code=status_code, detail=str(e))


@router.get("/crud", response_model=Union[RecordListResponse, RecordResponse])
def read_records(
    file_name: str = Query(settings.default_dataset, alias="fileName"),
    page: int = Query(1),
    limit: int = Query(10),
    keyword: Optional[str] = Query(None),
    sort_key: Optional[str] = Query(None, alias="sortKey"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    record_id: Optional[str] = Query(None, alias=ID_FIELD),
    store: RecordStore = Depends(get_record_store),
) -> Union[RecordListResponse, RecordResponse]:
    """List a page of records, or fetch one record when an id is given."""
    _require_file_name(file_name)
    try:
        if record_id:
            detail = store.get_record(file_name, record_id)
            return RecordResponse(data=detail.record, headers=detail.headers, non_editable_headers=detail.non_editable_headers)

        query = RecordQuery(keyword=keyword, sort_key=sort_key, sort_order=sort_order, page=page, limit=limit)
        result = store.list_records(file_name, query)
        return RecordListResponse(headers=result.headers, data=result.items, total=result.total, page=result.page, limit=result.limit)
    except RecordStoreError as e:
        raise _store_error(e, f"read records of '{file_name}'")
    except Exception as e:
        logger.error(f"Unexpected error reading records of '{file_name}': {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("/crud", response_model=RecordCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_record(
    data: Dict[str, Any] = Body(...),
    file_name: str = Query(settings.default_dataset, alias="fileName"),
    store: RecordStore = Depends(get_record_store),
) -> RecordCreatedResponse:
    """Create a record; the server assigns its id."""
    _require_file_name(file_name)
    try:
        record = store.create_record(file_name, data)
        return RecordCreatedResponse(new_data=record)
    except RecordStoreError as e:
        raise _store_error(e, f"create record in '{file_name}'")
    except Exception as e:
        logger.error(f"Unexpected error creating record in '{file_name}': {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/crud", response_model=RecordUpdatedResponse)
def update_record(
    data: Dict[str, Any] = Body(...),
    file_name: str = Query(settings.default_dataset, alias="fileName"),
    record_id: Optional[str] = Query(None, alias=ID_FIELD),
    store: RecordStore = Depends(get_record_store),
) -> RecordUpdatedResponse:
    """Update a record; an id in the body is ignored."""
    _require_file_name(file_name)
    _require_record_id(record_id)
    try:
        record = store.update_record(file_name, record_id, data)
        return RecordUpdatedResponse(updated_record=record)
    except RecordStoreError as e:
        raise _store_error(e, f"update record {record_id} in '{file_name}'")
    except Exception as e:
        logger.error(f"Unexpected error updating record {record_id} in '{file_name}': {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/crud", response_model=RecordDeletedResponse)
def delete_record(
    file_name: str = Query(settings.default_dataset, alias="fileName"),
    record_id: Optional[str] = Query(None, alias=ID_FIELD),
    store: RecordStore = Depends(get_record_store),
) -> RecordDeletedResponse:
    """Delete a record and return it."""
    _require_file_name(file_name)
    _require_record_id(record_id)
    try:
        record = store.delete_record(file_name, record_id)
        return RecordDeletedResponse(deleted_record=record)
    except RecordStoreError as e:
        raise _store_error(e, f"delete record {record_id} from '{file_name}'")
    except Exception as e:
        logger.error(f"Unexpected error deleting record {record_id} from '{file_name}': {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.api_route("/crud", methods=unsupported_methods(ALLOWED_METHODS), include_in_schema=False)
def crud_method_not_allowed(request: Request) -> None:
    raise method_not_allowed(request, ALLOWED_METHODS)

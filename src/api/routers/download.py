"""Download router returning a dataset's raw spreadsheet file."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from api.dependencies import get_record_store
from api.errors import method_not_allowed, status_for, unsupported_methods
from api.models import ERROR_RESPONSES
from config import settings
from record_store.dataset_manager import RecordStore
from record_store.exceptions import RecordStoreError
from utils.logging import logger

router = APIRouter(tags=["download"], responses=ERROR_RESPONSES)

ALLOWED_METHODS = ["GET"]


@router.get("/download", response_class=Response)
def download_dataset(
    file_name: str = Query(settings.default_dataset, alias="fileName"),
    store: RecordStore = Depends(get_record_store),
) -> Response:
    """Stream the dataset file back as an attachment."""
    if not file_name or not file_name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing fileName parameter")

    try:
        _, content = store.read_dataset(file_name)
    except RecordStoreError as e:
        logger.error(f"Failed to download '{file_name}': {str(e)}")
        raise HTTPException(status_code=status_for(e), detail=f"Failed to download file: {str(e)}")
    except Exception as e:
        logger.error(f"Unexpected error downloading '{file_name}': {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to download file: {str(e)}")

    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{file_name}.xlsx"'},
    )


@router.api_route("/download", methods=unsupported_methods(ALLOWED_METHODS), include_in_schema=False)
def download_method_not_allowed(request: Request) -> None:
    raise method_not_allowed(request, ALLOWED_METHODS)

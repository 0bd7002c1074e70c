"""API request and response models."""

from typing import Dict, List

from pydantic import BaseModel, Field

from record_store.models import ID_FIELD, HeaderField, Record


class EnvelopeModel(BaseModel):
    """Base for every JSON response envelope."""

    success: bool = Field(default=True, description="Whether the operation succeeded")

    model_config = {"populate_by_name": True}


class ErrorResponse(EnvelopeModel):
    """Response model for failed operations."""

    success: bool = False
    message: str = Field(..., description="Error message")


class RecordListResponse(EnvelopeModel):
    """Response model for listing records."""

    headers: List[HeaderField] = Field(..., description="Column keys with display labels")
    data: List[Record] = Field(..., description="Records on the requested page")
    total: int = Field(..., description="Number of records matching the search")
    page: int = Field(..., description="Current page")
    limit: int = Field(..., description="Records per page")


class RecordResponse(EnvelopeModel):
    """Response model for a single record."""

    data: Record = Field(..., description="The record")
    headers: Dict[str, str] = Field(..., description="Column key to display label")
    non_editable_headers: List[str] = Field(default_factory=lambda: [ID_FIELD], alias="nonEditableHeaders")


class RecordCreatedResponse(EnvelopeModel):
    """Response model for record creation."""

    new_data: Record = Field(..., alias="newData", description="The stored record including its assigned id")


class RecordUpdatedResponse(EnvelopeModel):
    """Response model for record updates."""

    updated_record: Record = Field(..., alias="updatedRecord")


class RecordDeletedResponse(EnvelopeModel):
    """Response model for record deletion."""

    deleted_record: Record = Field(..., alias="deletedRecord")


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or malformed parameter"},
    404: {"model": ErrorResponse, "description": "Dataset or record not found"},
    500: {"model": ErrorResponse, "description": "Spreadsheet could not be read or written"},
}

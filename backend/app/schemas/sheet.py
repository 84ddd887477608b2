"""
SheetStore Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between frontend and backend.
Why:   Input parsing, automatic serialization, and OpenAPI doc generation.
How:   Python attributes are snake_case; the wire format is the camelCase the
       spreadsheet frontend already speaks (`sheetName`, `sheets`, ...), via
       field aliases. FastAPI serializes response models by alias.

Validation is limited to presence and type. Request fields that the handlers
check themselves (sheet names) are Optional here so a missing value reaches
the service and becomes a 400, not FastAPI's 422. Non-string names are
stringified rather than rejected.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Shared Models
# ══════════════════════════════════════════════════════════════════════════


class CellEntry(BaseModel):
    """
    One non-empty cell of a sheet grid.

    Values are always stored as strings; numbers and booleans sent by a
    client are stringified, null becomes "".
    """
    row: int = Field(description="Zero-based row index")
    col: int = Field(description="Zero-based column index")
    value: str = Field(default="", description="Cell contents")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        return str(v)


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class SetCollectionRequest(BaseModel):
    """Body of POST /api/setCollection."""
    collection: Optional[str] = Field(
        default=None,
        description="Sheet name to target with getTable/saveTable",
    )


class SheetNameRequest(BaseModel):
    """Body of POST /api/addSheet and DELETE /api/deleteSheet."""
    sheet_name: Optional[str] = Field(
        default=None,
        alias="sheetName",
        description="Sheet name; required (checked by the handler)",
    )

    model_config = {"populate_by_name": True}

    @field_validator("sheet_name", mode="before")
    @classmethod
    def coerce_sheet_name(cls, v: Any) -> Optional[str]:
        if isinstance(v, str):
            return v
        # 0 and false count as missing, like an empty string
        return str(v) if v else None


class SaveTableRequest(BaseModel):
    """
    Body of POST /api/saveTable.

    The whole grid is sent on every save; nothing is merged with what was
    stored before. Cells are not checked against rows x columns.
    """
    rows: int = Field(description="Declared number of rows")
    columns: int = Field(description="Declared number of columns")
    data: List[CellEntry] = Field(default_factory=list, description="Non-empty cells")
    collection: Optional[str] = Field(
        default=None,
        description="Explicit target sheet; overrides the caller's active collection",
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Plain acknowledgement (setCollection, saveTable)."""
    message: str


class SheetActionResponse(BaseModel):
    """
    Outcome of addSheet / deleteSheet.

    `success=False` with HTTP 200 means a soft failure ("Sheet already
    exists!"), not an error.
    """
    success: bool
    message: str


class SheetListResponse(BaseModel):
    """Registered sheet names, in insertion order."""
    sheets: List[str] = Field(default_factory=list)


class TableMetadata(BaseModel):
    rows: int
    columns: int


class TableResponse(BaseModel):
    """
    Grid of the active collection.

    When nothing has been saved for the collection yet this is the default
    placeholder (5 x 5, no cells), not an error.
    """
    metadata: TableMetadata
    data: List[CellEntry] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all 4xx/5xx responses.

    Example:
        {
            "success": false,
            "error": "validation_error",
            "message": "Sheet name is required!",
            "details": {"field": "sheetName"},
            "request_id": "1a2b3c4d"
        }
    """
    success: bool = Field(default=False)
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Service health: process is up and the store answers SELECT 1."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

"""
Error envelope shared by every route.

    {"code": "ENTRY_NOT_FOUND", "message": "...", "details": {"day": "2026-03-16"}}

`code` is one of ENTRY_NOT_FOUND, EMPTY_BATCH, BATCH_TOO_LARGE,
INVALID_PERIOD_QUERY, VALIDATION_ERROR or INTERNAL_ERROR.
"""
from typing import Optional, Union

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One rejected request field (VALIDATION_ERROR only)."""
    field: str = Field(examples=["selected_blocks.0"])
    message: str
    type: str


class ErrorResponse(BaseModel):
    code: str = Field(examples=["ENTRY_NOT_FOUND"])
    message: str
    details: Optional[dict[str, Union[str, int, list[ErrorDetail]]]] = Field(
        default=None,
        description=(
            "day (ENTRY_NOT_FOUND), start/end (INVALID_PERIOD_QUERY), "
            "max_items/received (BATCH_TOO_LARGE), errors (VALIDATION_ERROR)."
        ),
    )

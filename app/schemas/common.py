"""
Error envelope shared by every router: `{code, message, details}`.
"""
from typing import Any, Optional
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """One rejected request field, as listed under details.errors."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None

"""Response envelope shared by all endpoints."""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Standard success envelope."""

    success: bool = True
    message: str
    data: Any = None
    meta: dict[str, Any] | None = None

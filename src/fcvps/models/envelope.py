"""Response envelope shared by every API endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success/message/data wrapper."""

    success: bool
    message: str = ""
    data: T | None = None

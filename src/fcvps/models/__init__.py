"""Data models."""

from .config import ClientConfig, Settings
from .envelope import ApiResponse
from .vm import (
    BASE_IMAGES,
    VM,
    VMRequest,
)

__all__ = [
    "ApiResponse",
    "BASE_IMAGES",
    "ClientConfig",
    "Settings",
    "VM",
    "VMRequest",
]

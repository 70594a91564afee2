"""API client, resolver and exceptions."""

from .client import VPSClient
from .exceptions import (
    ApiError,
    ConfigError,
    FcVpsError,
    NotFoundError,
    ProtocolError,
    ServiceTimeoutError,
    TransportError,
    ValidationError,
)
from .resolver import resolve_vm

__all__ = [
    "ApiError",
    "ConfigError",
    "FcVpsError",
    "NotFoundError",
    "ProtocolError",
    "ServiceTimeoutError",
    "TransportError",
    "VPSClient",
    "ValidationError",
    "resolve_vm",
]

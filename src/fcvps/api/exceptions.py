"""Custom exceptions for fc-vps API interactions."""


class FcVpsError(Exception):
    """Base exception for fc-vps."""

    pass


class ConfigError(FcVpsError):
    """Configuration related errors."""

    pass


class ValidationError(FcVpsError):
    """Client-side input rejected before any request is sent."""

    pass


class NotFoundError(FcVpsError):
    """No VM matched the given ID or name."""

    def __init__(self, resource: str, identifier: str) -> None:
        """Initialize not found error.

        Args:
            resource: Type of resource (VPS, image, etc.)
            identifier: Token the user supplied
        """
        super().__init__(f"{resource} with name or ID '{identifier}' not found")
        self.resource = resource
        self.identifier = identifier


class ApiError(FcVpsError):
    """The service answered and rejected the request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize API error.

        Args:
            message: Message supplied by the service
            status_code: HTTP status code if applicable
        """
        super().__init__(message)
        self.status_code = status_code


class TransportError(FcVpsError):
    """The service could not be reached or spoke an unexpected protocol."""

    pass


class ServiceTimeoutError(TransportError):
    """Request timeout errors."""

    pass


class ProtocolError(TransportError):
    """Response body is not a valid envelope or lacks its payload."""

    pass

"""Firecracker VPS service API client."""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    ApiError,
    ProtocolError,
    ServiceTimeoutError,
    TransportError,
)
from ..models.config import ClientConfig
from ..models.envelope import ApiResponse
from ..models.vm import VM, VMRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

API_PREFIX = "/api/v1"


class VPSClient:
    """Async client for the VPS management API."""

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize VPS client.

        Args:
            config: Client configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self.base_url = config.base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "VPSClient":
        """Async context manager entry.

        Returns:
            Self
        """
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Open the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
            )

    async def close(self) -> None:
        """Close the client connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Ensure client is connected.

        Returns:
            HTTP client

        Raises:
            RuntimeError: If not connected
        """
        if not self._client:
            raise RuntimeError("Client not connected. Use async with or call connect().")
        return self._client

    async def _send(
        self,
        method: str,
        endpoint: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a single request, mapping httpx failures to TransportError.

        Args:
            method: HTTP method
            endpoint: Path relative to the server URL
            json: JSON request body
            timeout: Per-request timeout overriding the client default

        Returns:
            Raw HTTP response

        Raises:
            ServiceTimeoutError: On timeout
            TransportError: On connection or other transport failures
        """
        client = self._ensure_connected()
        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            return await client.request(method, endpoint, **kwargs)
        except httpx.TimeoutException:
            raise ServiceTimeoutError(f"Request to {self.base_url}{endpoint} timed out")
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to connect to {self.base_url}: {e}")

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload_type: Any = Any,
        json: dict[str, Any] | None = None,
        require_data: bool = False,
    ) -> Any:
        """Make an API request and unwrap the response envelope.

        Args:
            method: HTTP method
            endpoint: API endpoint (with the /api/v1 prefix)
            payload_type: Type the envelope's data field is decoded into
            json: Request body
            require_data: Treat a successful envelope without data as a
                contract violation

        Returns:
            Decoded payload (None for operations without one)

        Raises:
            ApiError: When the service reports success=false
            ProtocolError: When the body is not a valid envelope
            TransportError: On network errors
        """
        response = await self._send(method, endpoint, json=json)
        envelope = self._decode(response, payload_type)

        if not envelope.success:
            raise ApiError(
                envelope.message or f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        if require_data and envelope.data is None:
            raise ProtocolError(
                f"Service reported success for {method} {endpoint} but returned no data"
            )

        return envelope.data

    def _decode(self, response: httpx.Response, payload_type: Any) -> ApiResponse:
        """Parse a response body into an envelope.

        Args:
            response: HTTP response
            payload_type: Type of the envelope's data field

        Returns:
            Decoded envelope

        Raises:
            ProtocolError: If the body is not JSON or not an envelope
        """
        try:
            body = response.json()
        except ValueError:
            raise ProtocolError(
                f"Invalid response from service (HTTP {response.status_code}): "
                f"{response.text[:200] or 'empty body'}"
            )

        try:
            return ApiResponse[payload_type].model_validate(body)
        except PydanticValidationError as e:
            raise ProtocolError(f"Unexpected response format: {e.error_count()} invalid field(s)")

    @staticmethod
    def _vm_path(vm_id: str, action: str | None = None) -> str:
        """Build the endpoint for a single VM."""
        path = f"{API_PREFIX}/vms/{quote(vm_id, safe='')}"
        if action:
            path = f"{path}/{action}"
        return path

    async def create_vm(self, request: VMRequest) -> VM:
        """Create a VPS.

        Args:
            request: Creation payload

        Returns:
            The created VM
        """
        logger.debug("Creating VPS with request: %s", request.model_dump_json(indent=2))
        return await self._request(
            "POST",
            f"{API_PREFIX}/vms",
            payload_type=VM,
            json=request.model_dump(),
            require_data=True,
        )

    async def list_vms(self) -> list[VM]:
        """Get all VPS instances.

        Returns:
            List of VMs
        """
        logger.debug("Fetching VPS list...")
        return await self._request(
            "GET", f"{API_PREFIX}/vms", payload_type=list[VM], require_data=True
        )

    async def get_vm(self, vm_id: str) -> VM:
        """Get a single VPS by ID.

        Args:
            vm_id: VM ID

        Returns:
            The VM
        """
        logger.debug("Fetching VPS details for: %s", vm_id)
        return await self._request(
            "GET", self._vm_path(vm_id), payload_type=VM, require_data=True
        )

    async def start_vm(self, vm_id: str) -> None:
        """Start a VPS.

        Args:
            vm_id: VM ID
        """
        logger.debug("Starting VPS: %s", vm_id)
        await self._request("POST", self._vm_path(vm_id, "start"))

    async def stop_vm(self, vm_id: str) -> None:
        """Stop a VPS.

        Args:
            vm_id: VM ID
        """
        logger.debug("Stopping VPS: %s", vm_id)
        await self._request("POST", self._vm_path(vm_id, "stop"))

    async def delete_vm(self, vm_id: str) -> None:
        """Delete a VPS.

        Args:
            vm_id: VM ID
        """
        logger.debug("Deleting VPS: %s", vm_id)
        await self._request("DELETE", self._vm_path(vm_id))

    async def health_check(self) -> bool:
        """Probe the service health endpoint.

        Any 2xx status counts as healthy; the body is not inspected.

        Returns:
            True if the service answered with a success status

        Raises:
            TransportError: If the service cannot be reached
        """
        logger.debug("Checking service health...")
        response = await self._send("GET", "/health", timeout=self.config.health_timeout)
        return response.is_success

"""Shared test fixtures: an in-memory VPS service behind httpx.MockTransport."""

from __future__ import annotations

import json
import re
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from fcvps.api.client import VPSClient
from fcvps.models.config import ClientConfig

SERVER = "http://vps.test:8080"

_VM_PATH = re.compile(r"^/api/v1/vms/(?P<id>[^/]+)(?:/(?P<action>start|stop))?$")


def make_vm(**overrides: Any) -> dict[str, Any]:
    """Return a VM payload as the service serializes it."""
    vm = {
        "id": "abc12345-6789-4def-8123-456789abcdef",
        "name": "demo",
        "cpu": 2,
        "memory": 1024,
        "disk_size": 20,
        "image": "ubuntu-22.04",
        "status": "created",
        "ip_address": "172.16.0.2",
        "created_at": "2024-05-01T12:30:45Z",
        "socket_path": "/tmp/firecracker-abc12345.sock",
        "kernel_path": "/var/lib/firecracker/kernels/vmlinux",
        "rootfs_path": "/var/lib/firecracker/vms/abc12345/rootfs.ext4",
        "tap_device": "tap-abc12345",
    }
    vm.update(overrides)
    return vm


def envelope(data: Any = None, success: bool = True, message: str = "ok") -> dict[str, Any]:
    body: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    return body


class FakeService:
    """Minimal stand-in for the VPS management API."""

    def __init__(self, vms: list[dict[str, Any]] | None = None) -> None:
        self.vms = list(vms or [])
        self.requests: list[httpx.Request] = []
        self.healthy = True
        self.unreachable = False
        self.overrides: dict[tuple[str, str], httpx.Response | Callable[[httpx.Request], httpx.Response]] = {}
        self._next_id = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)

        key = (request.method, request.url.path)
        if key in self.overrides:
            override = self.overrides[key]
            return override(request) if callable(override) else override

        path = request.url.path
        if path == "/health":
            if self.healthy:
                return httpx.Response(200, json=envelope(message="Service is healthy"))
            return httpx.Response(503, text="unavailable")

        if path == "/api/v1/vms":
            if request.method == "GET":
                return httpx.Response(200, json=envelope(list(self.vms)))
            if request.method == "POST":
                return self._create(json.loads(request.content))

        match = _VM_PATH.match(path)
        if match:
            return self._single(request.method, match["id"], match["action"])

        return httpx.Response(404, text="404 page not found")

    def _create(self, body: dict[str, Any]) -> httpx.Response:
        vm = make_vm(
            id=f"new{self._next_id:05d}-0000-4000-8000-000000000000",
            status="created",
            **body,
        )
        self._next_id += 1
        self.vms.append(vm)
        return httpx.Response(201, json=envelope(vm, message="VM created successfully"))

    def _single(self, method: str, vm_id: str, action: str | None) -> httpx.Response:
        vm = next((v for v in self.vms if v["id"] == vm_id), None)
        if vm is None:
            status = 404 if method == "GET" and action is None else 500
            return httpx.Response(status, json=envelope(success=False, message="VM not found"))

        if method == "GET" and action is None:
            return httpx.Response(200, json=envelope(vm))
        if method == "POST" and action == "start":
            vm["status"] = "running"
            return httpx.Response(200, json=envelope(message="VM started successfully"))
        if method == "POST" and action == "stop":
            vm["status"] = "stopped"
            return httpx.Response(200, json=envelope(message="VM stopped successfully"))
        if method == "DELETE" and action is None:
            self.vms.remove(vm)
            return httpx.Response(200, json=envelope(message="VM deleted successfully"))
        return httpx.Response(405, text="method not allowed")

    def calls(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        ]

    @property
    def mutations(self) -> list[httpx.Request]:
        """Requests that change service state."""
        return [r for r in self.requests if r.method in ("POST", "DELETE")]


@pytest.fixture
def service() -> FakeService:
    return FakeService([make_vm()])


@pytest.fixture
def client_factory(service: FakeService) -> Callable[..., VPSClient]:
    def factory(config: ClientConfig | None = None) -> VPSClient:
        return VPSClient(config or ClientConfig(server=SERVER), transport=httpx.MockTransport(service))

    return factory


@pytest_asyncio.fixture
async def client(client_factory) -> VPSClient:
    async with client_factory() as c:
        yield c


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at a temp dir and clear FC_VPS_SERVER."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("FC_VPS_SERVER", raising=False)
    return tmp_path


@pytest.fixture
def cli_service(service: FakeService, isolated_home, monkeypatch) -> FakeService:
    """Route every CLI command's client to the fake service."""
    monkeypatch.setattr(
        "fcvps.cli._shared.VPSClient",
        lambda config: VPSClient(config, transport=httpx.MockTransport(service)),
    )
    monkeypatch.setattr("fcvps.cli._shared.WAIT_GRACE_SECONDS", 0)
    monkeypatch.setattr("fcvps.cli.handlers.WAIT_GRACE_SECONDS", 0)
    return service


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep Rich from wrapping table cells and panels in captured output."""
    from fcvps.utils.output import console

    monkeypatch.setattr(console, "width", 200)

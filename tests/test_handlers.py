"""Tests for fcvps.cli.handlers."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import httpx
import pytest

from fcvps.api.exceptions import ApiError, NotFoundError, TransportError, ValidationError
from fcvps.cli import handlers

from conftest import make_vm

VM_ID = "abc12345-6789-4def-8123-456789abcdef"


@pytest.fixture(autouse=True)
def no_grace_period(monkeypatch):
    monkeypatch.setattr(handlers, "WAIT_GRACE_SECONDS", 0)


class TestCreate:
    @pytest.mark.asyncio
    async def test_flags_create_and_render(self, client, service, capsys):
        await handlers.handle_create(
            client, name="web", cpu=2, memory=1024, disk=20, image="ubuntu-22.04"
        )

        out = capsys.readouterr().out
        assert "VPS created successfully!" in out
        assert "Name: web" in out
        assert "CPU: 2 cores" in out
        assert "Memory: 1024MB" in out
        assert "Disk: 20GB" in out
        assert "Status: created" in out
        assert len(service.calls("POST", "/api/v1/vms")) == 1

    @pytest.mark.asyncio
    async def test_defaults_when_flags_omitted(self, client, service):
        await handlers.handle_create(client)

        body = json.loads(service.calls("POST", "/api/v1/vms")[0].content)
        assert body["name"].startswith("vps-")
        assert body["image"] == "ubuntu-24.04"
        assert (body["cpu"], body["memory"], body["disk_size"]) == (1, 512, 10)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cpu, memory, disk", [(0, 512, 10), (1, 9000, 10), (1, 512, 200)])
    async def test_invalid_values_never_reach_the_service(self, client, service, cpu, memory, disk):
        with pytest.raises(ValidationError):
            await handlers.handle_create(client, name="x", cpu=cpu, memory=memory, disk=disk)
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_interactive_flow(self, client, service, monkeypatch):
        monkeypatch.setattr(handlers, "prompt", MagicMock(return_value="box"))
        monkeypatch.setattr(handlers, "select_menu", MagicMock(return_value=4))
        monkeypatch.setattr(handlers, "prompt_int", MagicMock(side_effect=[4, 2048, 40]))

        await handlers.handle_create(client, interactive=True)

        body = json.loads(service.calls("POST", "/api/v1/vms")[0].content)
        assert body == {
            "name": "box",
            "cpu": 4,
            "memory": 2048,
            "disk_size": 40,
            "image": "debian-11",
        }

    @pytest.mark.asyncio
    async def test_interactive_cancelled_image_menu(self, client, service, monkeypatch, capsys):
        monkeypatch.setattr(handlers, "prompt", MagicMock(return_value="box"))
        monkeypatch.setattr(handlers, "select_menu", MagicMock(return_value=None))

        await handlers.handle_create(client, interactive=True)

        assert service.requests == []
        assert "Operation cancelled" in capsys.readouterr().out


class TestList:
    @pytest.mark.asyncio
    async def test_empty(self, client, service, capsys):
        service.vms.clear()
        await handlers.handle_list(client)
        out = capsys.readouterr().out
        assert "No VPS instances found" in out
        assert "fc-vps create --interactive" in out

    @pytest.mark.asyncio
    async def test_status_filter_is_case_insensitive(self, client, service, capsys):
        service.vms.append(make_vm(id="run00000-1111", name="runner", status="running"))
        await handlers.handle_list(client, status="RUNNING")
        out = capsys.readouterr().out
        assert "runner" in out
        assert "demo" not in out

    @pytest.mark.asyncio
    async def test_filter_matches_nothing(self, client, capsys):
        await handlers.handle_list(client, status="running")
        assert "No VPS instances match the filter criteria" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_table_shows_short_id(self, client, capsys):
        await handlers.handle_list(client)
        out = capsys.readouterr().out
        assert "abc12345" in out
        assert VM_ID not in out

    @pytest.mark.asyncio
    async def test_detailed(self, client, capsys):
        await handlers.handle_list(client, detailed=True)
        out = capsys.readouterr().out
        assert VM_ID in out
        assert "2024-05-01 12:30:45 UTC" in out


class TestGet:
    @pytest.mark.asyncio
    async def test_details_by_name(self, client, capsys):
        await handlers.handle_get(client, "demo")
        out = capsys.readouterr().out
        assert "TAP Device" in out
        assert "tap-abc12345" in out
        assert "172.16.0.2" in out

    @pytest.mark.asyncio
    async def test_json(self, client, capsys):
        await handlers.handle_get(client, VM_ID, as_json=True)
        data = json.loads(capsys.readouterr().out)
        assert data["id"] == VM_ID
        assert data["disk_size"] == 20

    @pytest.mark.asyncio
    async def test_unknown(self, client, service):
        service.vms.clear()
        with pytest.raises(NotFoundError):
            await handlers.handle_get(client, "ghost")


class TestStart:
    @pytest.mark.asyncio
    async def test_already_running_is_noop(self, client, service, capsys):
        service.vms[0]["status"] = "running"

        await handlers.handle_start(client, VM_ID)

        assert service.mutations == []
        assert "already running" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_starts_and_waits(self, client, service, monkeypatch, capsys):
        spinner_calls = []

        async def fake_spinner(action_desc, coro, wait_desc=None, wait_seconds=0):
            spinner_calls.append((action_desc, wait_desc, wait_seconds))
            return await coro

        monkeypatch.setattr(handlers, "WAIT_GRACE_SECONDS", 3)
        monkeypatch.setattr(handlers, "run_with_spinner", fake_spinner)

        await handlers.handle_start(client, "demo", wait=True)

        assert len(service.calls("POST", f"/api/v1/vms/{VM_ID}/start")) == 1
        assert spinner_calls == [("Starting VM...", "Waiting for VM to be ready...", 3)]
        out = capsys.readouterr().out
        assert "ssh user@172.16.0.2" in out

    @pytest.mark.asyncio
    async def test_rejection_surfaces(self, client, service):
        service.overrides[("POST", f"/api/v1/vms/{VM_ID}/start")] = httpx.Response(
            500, json={"success": False, "message": "Failed to start VM: boom"}
        )

        with pytest.raises(ApiError, match="Failed to start VM: boom"):
            await handlers.handle_start(client, VM_ID)


class TestStop:
    @pytest.mark.asyncio
    async def test_already_stopped_is_noop(self, client, service, capsys):
        service.vms[0]["status"] = "stopped"

        await handlers.handle_stop(client, VM_ID, force=True)

        assert service.mutations == []
        assert "already stopped" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_force_skips_confirmation(self, client, service, monkeypatch):
        service.vms[0]["status"] = "running"
        confirm = MagicMock()
        monkeypatch.setattr(handlers, "confirm", confirm)

        await handlers.handle_stop(client, VM_ID, force=True)

        confirm.assert_not_called()
        assert service.vms[0]["status"] == "stopped"

    @pytest.mark.asyncio
    async def test_declined(self, client, service, monkeypatch, capsys):
        service.vms[0]["status"] = "running"
        monkeypatch.setattr(handlers, "confirm", MagicMock(return_value=False))

        await handlers.handle_stop(client, VM_ID)

        assert service.mutations == []
        assert "Operation cancelled" in capsys.readouterr().out


class TestDelete:
    @pytest.mark.asyncio
    async def test_declined_keeps_vm(self, client, service, monkeypatch, capsys):
        monkeypatch.setattr(handlers, "confirm", MagicMock(return_value=False))

        await handlers.handle_delete(client, "demo")

        assert service.mutations == []
        assert len(service.vms) == 1
        out = capsys.readouterr().out
        assert "cannot be undone" in out
        assert "Operation cancelled" in out

    @pytest.mark.asyncio
    async def test_confirmed(self, client, service, monkeypatch):
        monkeypatch.setattr(handlers, "confirm", MagicMock(return_value=True))

        await handlers.handle_delete(client, "demo")

        assert service.calls("DELETE", f"/api/v1/vms/{VM_ID}")
        assert service.vms == []

    @pytest.mark.asyncio
    async def test_force_still_warns(self, client, service, capsys):
        await handlers.handle_delete(client, VM_ID, force=True)

        assert service.vms == []
        assert "cannot be undone" in capsys.readouterr().out


class TestHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, client, capsys):
        await handlers.handle_health(client)
        assert "Service is healthy and running" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_unhealthy_raises(self, client, service):
        service.healthy = False
        with pytest.raises(TransportError, match="health check failed"):
            await handlers.handle_health(client)


class TestMarkupInServiceData:
    @pytest.mark.asyncio
    async def test_warning_shows_name_literally(self, client, service, capsys):
        service.vms[0].update(name="[bold]x[/bold]", status="stopped")

        await handlers.handle_stop(client, VM_ID, force=True)

        assert "VPS '[bold]x[/bold]' is already stopped" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_details_escape_paths_and_status(self, client, service, capsys):
        service.vms[0].update(status="[weird]", tap_device="tap[/]0")

        await handlers.handle_get(client, VM_ID)

        out = capsys.readouterr().out
        assert "[weird]" in out
        assert "tap[/]0" in out

    def test_request_from_flags_fills_defaults(self):
        request = handlers.request_from_flags(name="box")
        assert (request.cpu, request.memory, request.disk_size, request.image) == (
            1, 512, 10, "ubuntu-24.04",
        )

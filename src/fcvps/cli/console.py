"""Interactive management console.

A menu loop driven by an explicit state machine:

    MENU_DISPLAYED -> ACTION_EXECUTING -> RESULT_DISPLAYED -> MENU_DISPLAYED
    MENU_DISPLAYED -> EXITED  (Exit, Escape, or closed input)

Handler errors are caught at the dispatch boundary, printed, and the loop
carries on.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable

from ._shared import pick_vm
from .handlers import (
    handle_create,
    handle_delete,
    handle_get,
    handle_health,
    handle_list,
    handle_start,
    handle_stop,
)
from ..api.client import VPSClient
from ..api.exceptions import FcVpsError
from ..utils import console, pause, print_cancelled, print_error, select_menu

logger = logging.getLogger(__name__)


class ConsoleState(Enum):
    """States of the console loop."""

    MENU_DISPLAYED = "menu"
    ACTION_EXECUTING = "executing"
    RESULT_DISPLAYED = "result"
    EXITED = "exited"


EXIT_ACTION = "Exit"


class InteractiveConsole:
    """Menu-driven loop re-dispatching to the command handlers."""

    def __init__(self, client: VPSClient) -> None:
        self.client = client
        self.state = ConsoleState.MENU_DISPLAYED
        self.actions: dict[str, Callable[[], Awaitable[None]]] = {
            "List VPS instances": self._list,
            "Create new VPS": self._create,
            "Start VPS": self._start,
            "Stop VPS": self._stop,
            "Delete VPS": self._delete,
            "Show VPS details": self._details,
            "Check service health": self._health,
        }
        self.labels = [*self.actions, EXIT_ACTION]

    async def _list(self) -> None:
        await handle_list(self.client)

    async def _create(self) -> None:
        await handle_create(self.client, interactive=True)

    async def _start(self) -> None:
        vm = await pick_vm(self.client, "  Select VPS to start:")
        if vm:
            await handle_start(self.client, vm.id, wait=True)

    async def _stop(self) -> None:
        vm = await pick_vm(self.client, "  Select VPS to stop:")
        if vm:
            await handle_stop(self.client, vm.id, force=False)

    async def _delete(self) -> None:
        vm = await pick_vm(self.client, "  Select VPS to delete:")
        if vm:
            await handle_delete(self.client, vm.id, force=False)

    async def _details(self) -> None:
        vm = await pick_vm(self.client, "  Select VPS to view details:")
        if vm:
            await handle_get(self.client, vm.id)

    async def _health(self) -> None:
        await handle_health(self.client)

    def _show_menu(self) -> str | None:
        """Draw the menu and return the chosen label (None if cancelled)."""
        console.print()
        console.print("[bold cyan]Firecracker VPS Management Console[/bold cyan]")
        console.rule(style="dim")
        idx = select_menu(self.labels, "  Select an action:")
        if idx is None:
            return None
        return self.labels[idx]

    async def _execute(self, label: str) -> None:
        """Run one action, reporting any fc-vps error instead of raising it."""
        try:
            await self.actions[label]()
        except FcVpsError as e:
            logger.debug("Console action '%s' failed: %r", label, e)
            print_error(str(e))

    async def run(self) -> None:
        """Run the loop until the user exits."""
        selected: str | None = None

        while self.state is not ConsoleState.EXITED:
            try:
                if self.state is ConsoleState.MENU_DISPLAYED:
                    selected = self._show_menu()
                    if selected is None or selected == EXIT_ACTION:
                        self.state = ConsoleState.EXITED
                    else:
                        self.state = ConsoleState.ACTION_EXECUTING

                elif self.state is ConsoleState.ACTION_EXECUTING:
                    await self._execute(selected)
                    self.state = ConsoleState.RESULT_DISPLAYED

                elif self.state is ConsoleState.RESULT_DISPLAYED:
                    pause()
                    self.state = ConsoleState.MENU_DISPLAYED

            except (EOFError, KeyboardInterrupt):
                console.print()
                print_cancelled("Input closed")
                self.state = ConsoleState.EXITED

        console.print("Goodbye!")


async def handle_console(client: VPSClient) -> None:
    """Entry point used by the `console` command."""
    await InteractiveConsole(client).run()

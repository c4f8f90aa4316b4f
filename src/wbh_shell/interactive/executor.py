from typing import Awaitable, Callable, Dict, Optional

import structlog
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..backend.base import BaseResourceBackend
from ..config import CONFIRMATION_TOKEN, WEBHOOK_URL_PREFIX
from ..errors import BackendError, ResourceNotFoundError, UnauthorizedError
from .commands import COMMANDS, CommandKind, ParsedCommand, parse_command
from .session import SessionState

console = Console()
logger = structlog.get_logger(__name__)

Handler = Callable[[ParsedCommand], Awaitable[None]]


def describe_failure(error: BackendError) -> str:
    """Renders the status/body part of a backend failure for the console."""
    if error.status is None:
        return f"could not reach the webhook\n\tReason: {escape(error.body)}"
    return f"got status {error.status}\n\tBody: {escape(error.body)}"


class CommandExecutor:
    """
    Turns input lines into backend calls and session state changes.

    Every command either prints a diagnostic or calls the backend exactly
    once. Backend failures are reported here and never propagate to the
    caller.
    """

    def __init__(
        self,
        state: SessionState,
        backend: BaseResourceBackend,
        output: Optional[Console] = None,
    ):
        self.state = state
        self.backend = backend
        self.console = output or console
        self.handlers: Dict[CommandKind, Handler] = {
            CommandKind.SELECT: self.execute_select,
            CommandKind.SEND: self.execute_send,
            CommandKind.SETNAME: self.execute_setname,
            CommandKind.DELETE: self.execute_delete,
            CommandKind.HELP: self.execute_help,
            CommandKind.QUIT: self.execute_quit,
            CommandKind.UNKNOWN: self.execute_unknown,
        }

    async def execute(self, command_text: str) -> None:
        command = parse_command(command_text)
        logger.debug(
            "executor.dispatch.begin",
            kind=command.kind.value,
            has_resource=self.state.has_resource,
        )
        await self.handlers[command.kind](command)

    def _require_resource(self) -> Optional[str]:
        handle = self.state.get()
        if handle is None:
            self.console.print("[bold red]No webhook selected[/bold red]")
        return handle

    async def execute_select(self, command: ParsedCommand):
        url = command.argument
        if not url:
            self.console.print("[bold red]No webhook url provided[/bold red]")
            return
        if not url.startswith(WEBHOOK_URL_PREFIX):
            self.console.print(
                f"[bold red]Expected webhook to start with {WEBHOOK_URL_PREFIX}[/bold red]"
            )
            return

        with self.console.status("Looking up webhook...", spinner="dots"):
            try:
                info = await self.backend.connect(url)
            except ResourceNotFoundError:
                self.console.print("[bold red]Unknown webhook. Deleted?[/bold red]")
                return
            except UnauthorizedError:
                self.console.print(
                    "[bold red]Webhook does exist, but token is invalid[/bold red]"
                )
                return
            except BackendError as e:
                logger.debug("executor.select.failed", status=e.status)
                self.console.print(
                    f"[bold red]Something else went wrong,[/bold red] {describe_failure(e)}\n"
                    "Please report this to the dev"
                )
                return

        self.state.set(url)
        self.console.print(
            f"[bold green]Connected to webhook in channel "
            f"#{escape(info.location_id)}:[/bold green] {escape(info.display_name)}"
        )

    async def execute_send(self, command: ParsedCommand):
        handle = self._require_resource()
        if handle is None:
            return
        if not command.argument:
            self.console.print("[bold red]Can't send empty message[/bold red]")
            return

        with self.console.status("Sending message...", spinner="dots"):
            try:
                await self.backend.invoke(handle, "send", command.argument)
            except BackendError as e:
                self.console.print(
                    f"[bold red]Failed to send message,[/bold red] {describe_failure(e)}"
                )
                return
        self.console.print("[bold green]Sent message[/bold green]")

    async def execute_setname(self, command: ParsedCommand):
        handle = self._require_resource()
        if handle is None:
            return
        if not command.argument:
            self.console.print(
                "[bold red]Can't set the webhook's name to an empty string[/bold red]"
            )
            return

        with self.console.status("Renaming webhook...", spinner="dots"):
            try:
                await self.backend.invoke(handle, "rename", command.argument)
            except BackendError as e:
                self.console.print(
                    f"[bold red]Something went wrong,[/bold red] {describe_failure(e)}"
                )
                return
        self.console.print("[bold green]Modified webhook[/bold green]")

    async def execute_delete(self, command: ParsedCommand):
        handle = self._require_resource()
        if handle is None:
            return
        if command.argument != CONFIRMATION_TOKEN:
            self.console.print(
                f'[bold yellow]Are you sure?[/bold yellow] Run again with "{CONFIRMATION_TOKEN}" to delete'
            )
            return

        with self.console.status("Deleting webhook...", spinner="dots"):
            try:
                await self.backend.disconnect(handle)
            except BackendError as e:
                self.console.print(
                    f"[bold red]Something went wrong,[/bold red] {describe_failure(e)}"
                )
                return

        self.state.clear()
        self.state.is_running = False
        self.console.print(
            "[bold green]Deleted webhook.[/bold green] Exiting, since webhook is dead anyways"
        )

    async def execute_help(self, command: ParsedCommand):
        table = Table(
            title="[bold cyan]All available commands[/bold cyan]",
            box=box.MINIMAL,
            padding=(0, 1),
        )
        table.add_column("Command", style="yellow", no_wrap=True)
        table.add_column("Description")
        for entry in COMMANDS:
            table.add_row(entry.name, entry.help_text)
        self.console.print(table)

    async def execute_quit(self, command: ParsedCommand):
        self.state.is_running = False

    async def execute_unknown(self, command: ParsedCommand):
        self.console.print(
            f'[bold red]Unknown command[/bold red] "{escape(command.word)}"'
        )

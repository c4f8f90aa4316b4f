import asyncio
from typing import Optional

import structlog
from prompt_toolkit import PromptSession
from prompt_toolkit.filters import Condition
from prompt_toolkit.history import History
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console

from ..backend.discord import DiscordWebhookBackend
from ..config import HTTP_TIMEOUT, PROMPT
from .completer import WbhCompleter
from .executor import CommandExecutor, console
from .history import UniqueInMemoryHistory
from .session import SessionState

logger = structlog.get_logger(__name__)

WELCOME_MESSAGE = (
    "[bold]Welcome to the webhook manager shell[/bold]\nRun `help` to get started"
)
FAREWELL_MESSAGE = "goodbye"


class ShellDriver:
    """
    The read-eval loop. Owns the session state through its executor and
    stops after `quit`, a successful `delete`, or end of input.

    Blank or whitespace-only lines are recorded in history (when non-empty)
    but not dispatched, so pressing Enter on an empty prompt prints nothing
    rather than an unknown-command diagnostic.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        prompt_session,
        history: History,
        output: Optional[Console] = None,
    ):
        self.executor = executor
        self.prompt_session = prompt_session
        self.history = history
        self.console = output or console

    @property
    def state(self):
        return self.executor.state

    async def run(self):
        self.console.print(WELCOME_MESSAGE)
        while self.state.is_running:
            try:
                command_text = await self.prompt_session.prompt_async(PROMPT)
            except KeyboardInterrupt:
                continue
            except EOFError:
                self.console.print()
                self.state.is_running = False
                continue

            if command_text:
                self.history.append_string(command_text)
            if not command_text.strip():
                continue
            await self.executor.execute(command_text)

        logger.debug("shell.loop.finished", has_resource=self.state.has_resource)
        self.console.print(FAREWELL_MESSAGE)


def create_prompt_session(history: History, **kwargs) -> PromptSession:
    """
    Builds the prompt for the shell: command completion while typing, and an
    Enter key that accepts a highlighted completion instead of submitting.

    Extra keyword arguments (e.g. `input`, `output`) go to `PromptSession`.
    """
    bindings = KeyBindings()
    prompt_session = PromptSession(
        history=history,
        completer=WbhCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        **kwargs,
    )

    @bindings.add(
        "enter",
        filter=Condition(
            lambda: prompt_session.default_buffer.complete_state is not None
        ),
    )
    def _(event):
        """Applies the current completion instead of submitting."""
        complete_state = event.current_buffer.complete_state
        if complete_state.current_completion is not None:
            event.current_buffer.apply_completion(complete_state.current_completion)
        else:
            event.current_buffer.validate_and_handle()

    return prompt_session


def start_repl(timeout: float = HTTP_TIMEOUT):
    """Starts the main Read-Eval-Print-Loop (REPL) for the interactive shell."""
    history = UniqueInMemoryHistory()
    prompt_session = create_prompt_session(history)

    async def repl_main():
        async with DiscordWebhookBackend(timeout=timeout) as backend:
            executor = CommandExecutor(SessionState(), backend)
            await ShellDriver(executor, prompt_session, history).run()

    asyncio.run(repl_main())

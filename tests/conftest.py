import io
from unittest.mock import AsyncMock

import pytest
from rich.console import Console

from wbh_shell.backend.base import BaseResourceBackend
from wbh_shell.config import WEBHOOK_URL_PREFIX
from wbh_shell.data.schemas import ResourceInfo
from wbh_shell.interactive.executor import CommandExecutor
from wbh_shell.interactive.session import SessionState

WEBHOOK_URL = WEBHOOK_URL_PREFIX + "1003008312301862922/token-abc"


@pytest.fixture
def output() -> Console:
    """A console that renders plain text into an in-memory buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def printed(output: Console):
    """Returns everything printed to the test console so far."""
    return lambda: output.file.getvalue()


@pytest.fixture
def backend() -> AsyncMock:
    """A backend double; every operation succeeds unless a test says otherwise."""
    mock_backend = AsyncMock(spec=BaseResourceBackend)
    mock_backend.connect.return_value = ResourceInfo(
        name="Release Bot", channel_id="424242"
    )
    mock_backend.invoke.return_value = None
    mock_backend.disconnect.return_value = None
    return mock_backend


@pytest.fixture
def state() -> SessionState:
    return SessionState()


@pytest.fixture
def executor(state, backend, output) -> CommandExecutor:
    return CommandExecutor(state, backend, output)


@pytest.fixture
def selected_state(state) -> SessionState:
    """A session that already has a webhook selected."""
    state.set(WEBHOOK_URL)
    return state


@pytest.fixture
def webhook_url() -> str:
    return WEBHOOK_URL

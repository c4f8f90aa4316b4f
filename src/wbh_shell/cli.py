import functools
import logging
import sys

import structlog
import typer
from rich.console import Console
from rich.traceback import Traceback

from wbh_shell.config import HTTP_TIMEOUT
from wbh_shell.interactive.main import start_repl
from wbh_shell.state import APP_STATE


def setup_logging(verbose: bool):
    """
    Configures structlog for the entire application.
    - Default level: WARNING (the shell owns stdout while it runs)
    - Verbose level: DEBUG
    - All logs are routed to stderr.
    """
    log_level = logging.DEBUG if verbose else logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    # ConsoleRenderer does the formatting, so the handler needs none.
    root_logger.addHandler(logging.StreamHandler(sys.stderr))
    root_logger.setLevel(log_level)


def handle_exceptions(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        console = Console(stderr=True)
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            if APP_STATE.verbose_mode:
                console.print(
                    Traceback.from_exception(
                        type(e), e, e.__traceback__, show_locals=True
                    )
                )
            raise typer.Exit(code=1)

    return wrapper


app = typer.Typer(
    name="wbh",
    help="An interactive shell for managing a Discord webhook.",
    no_args_is_help=False,
    invoke_without_command=True,
    rich_markup_mode="markdown",
)


@app.callback(invoke_without_command=True)
@handle_exceptions
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose DEBUG logging for detailed tracebacks.",
    ),
    timeout: float = typer.Option(
        HTTP_TIMEOUT,
        "--timeout",
        min=0.1,
        help="Seconds to wait for each webhook request (env: WBH_HTTP_TIMEOUT).",
    ),
):
    """Starts the interactive webhook shell."""
    APP_STATE.verbose_mode = verbose
    setup_logging(verbose)
    start_repl(timeout=timeout)

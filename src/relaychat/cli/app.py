"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.panel import Panel

from ..client import RelayClient
from ..config import EMPTY_REPLY_TEXT, Settings
from ..errors import RelayError, ValidationError
from ..logs import configure_logging

app = typer.Typer(
    name="relaychat",
    help="Chat client and completion relay for the Gemini API",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(
        None,
        "--host",
        "-H",
        help="Interface to bind (default: RELAY_HOST or 0.0.0.0)"
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on (default: RELAY_PORT or 3000)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error"
    ),
):
    """Run the completion relay (POST /ask)."""
    from ..server import serve as run_server

    settings = Settings.from_env()
    overrides = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if log_level is not None:
        overrides["log_level"] = log_level
    if overrides:
        settings = settings.model_copy(update=overrides)

    if not settings.gemini_api_key:
        console.print("[yellow]GEMINI_API_KEY is not set; provider calls will fail.[/yellow]")

    run_server(settings)


@app.command()
def chat(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Relay base URL (default: RELAY_URL or http://localhost:3000)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Request timeout in seconds (default: wait indefinitely)"
    ),
):
    """Open the interactive chat screen."""
    from ..ui import run_chat_tui

    settings = Settings.from_env()
    asyncio.run(run_chat_tui(url or settings.relay_url, timeout=timeout))


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Relay base URL (default: RELAY_URL or http://localhost:3000)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log relay traffic"
    ),
):
    """Send a single prompt through the relay and print the reply."""
    settings = Settings.from_env()
    if verbose:
        configure_logging("DEBUG")

    async def _ask() -> str:
        async with RelayClient(url or settings.relay_url) as relay:
            return await relay.send(prompt)

    try:
        reply = asyncio.run(_ask())
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)
    except RelayError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(Panel(reply or EMPTY_REPLY_TEXT, title="Reply", border_style="green"))


def main() -> None:
    app()


if __name__ == "__main__":
    main()

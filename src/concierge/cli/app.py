"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..config import APOLOGY_TEXT
from ..errors import ConciergeError
from .console import ConsoleSink
from .providers import (
    get_credential_store,
    get_log_level,
    get_session,
    make_console_debug_callback,
)

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="concierge",
    help="Versico assistant: chat with an OpenAI-backed helper from the terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def chat(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    ),
    ephemeral: bool = typer.Option(
        False,
        "--ephemeral",
        help="Keep the API key in memory only for this session"
    ),
):
    """Open the interactive chat TUI."""
    from ..ui import run_textual_tui

    session = get_session(ephemeral=ephemeral)
    asyncio.run(run_textual_tui(session, log_level=get_log_level(log_level)))


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the assistant"),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print session logs at this level (debug, info, warning, error)"
    ),
):
    """Ask a single question and print the reply."""
    async def _ask():
        sink = ConsoleSink(console)
        session = get_session(sink=sink)
        level = get_log_level(log_level)
        if level:
            session.set_debug_callback(make_console_debug_callback(level, console))

        async with session:
            if await session.credentials.load() is None:
                secret = typer.prompt("OpenAI API key", hide_input=True)
                await session.submit_credential(secret)
            await session.open()
            reply = await session.send(question)
            # no reply, or the apology standing in for a failed completion
            if reply is None or reply.content == APOLOGY_TEXT:
                raise typer.Exit(code=1)

    try:
        asyncio.run(_ask())
    except ConciergeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command("set-key")
def set_key(
    key: str | None = typer.Argument(
        None,
        help="API key to store (prompted with hidden input if omitted)"
    ),
):
    """Store the OpenAI API key used by the assistant."""
    secret = key if key is not None else typer.prompt("OpenAI API key", hide_input=True)

    async def _set_key():
        store = get_credential_store()
        try:
            await store.connect()
            await store.save(secret)
        finally:
            await store.disconnect()

    try:
        asyncio.run(_set_key())
    except ConciergeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]API key saved.[/green]")
    console.print("[dim]The key is stored in plain text on this machine.[/dim]")


@app.command("forget-key")
def forget_key():
    """Remove the stored API key."""
    async def _forget() -> bool:
        store = get_credential_store()
        try:
            await store.connect()
            return await store.clear()
        finally:
            await store.disconnect()

    if asyncio.run(_forget()):
        console.print("[green]API key removed.[/green]")
    else:
        console.print("[dim]No API key was stored.[/dim]")


@app.command("key-status")
def key_status():
    """Report whether an API key is stored (never prints it)."""
    async def _status() -> bool:
        store = get_credential_store()
        try:
            await store.connect()
            return await store.load() is not None
        finally:
            await store.disconnect()

    if asyncio.run(_status()):
        console.print("[green]An API key is stored.[/green]")
    else:
        console.print("[yellow]No API key stored. Run 'concierge set-key'.[/yellow]")


if __name__ == "__main__":
    app()

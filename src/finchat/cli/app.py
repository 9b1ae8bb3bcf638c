"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..client import AnalystServiceError
from ..session import ChatSession, Message
from ..ui.formatting import render_markdown
from ..ui.images import ChartDecodeError, save_chart, write_chart
from .providers import get_api_url, get_chart_dir, get_client, get_timeout

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="finchat",
    help="Chat with the AI Financial Analyst service from your terminal",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_WORDS = ("exit", "quit", "q")


def _api_url_option():
    return typer.Option(
        None,
        "--api-url",
        "-u",
        help="Service endpoint (default: FINCHAT_API_URL or the hosted service)"
    )


def _timeout_option():
    return typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.1,
        help="Seconds to wait for an answer (default: FINCHAT_TIMEOUT or no timeout)"
    )


def _print_reply(reply: Message, chart_dir: Path | None) -> None:
    """Print an assistant reply and save its chart, if any."""
    if reply.error:
        console.print(f"[bold red]Analyst:[/bold red] {escape(reply.text)}\n")
        return

    console.print("[bold green]Analyst:[/bold green]")
    console.print(render_markdown(reply.text))

    if reply.chart_image and chart_dir is not None:
        try:
            path = save_chart(reply.chart_image, chart_dir)
        except (ChartDecodeError, OSError) as e:
            console.print(f"[yellow]Chart could not be saved: {escape(str(e))}[/yellow]")
        else:
            console.print(f"[dim]Chart saved to {path}[/dim]")
    console.print()


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the analyst"),
    save_chart_to: Path | None = typer.Option(
        None,
        "--save-chart",
        "-c",
        dir_okay=False,
        help="Write the returned chart PNG to this file"
    ),
    api_url: str | None = _api_url_option(),
    timeout: float | None = _timeout_option(),
):
    """Ask a single question and print the answer."""
    async def _ask():
        client = get_client(console, api_url=api_url, timeout=timeout)
        try:
            session = ChatSession(client, greeting=None)
            with console.status("[dim]Analyzing...[/dim]"):
                reply = await session.send(question)

            if reply is None:
                console.print("[red]Error: question is empty[/red]")
                raise typer.Exit(code=1)

            if reply.error:
                console.print(f"[red]{escape(reply.text)}[/red]")
                raise typer.Exit(code=1)

            console.print(render_markdown(reply.text))

            if reply.chart_image:
                if save_chart_to is None:
                    console.print("[dim]A chart was returned; use --save-chart to keep it.[/dim]")
                else:
                    try:
                        path = write_chart(reply.chart_image, save_chart_to)
                    except (ChartDecodeError, OSError) as e:
                        console.print(f"[red]Error: {escape(str(e))}[/red]")
                        raise typer.Exit(code=1)
                    console.print(f"[green]Chart saved to {path}[/green]")
        finally:
            await client.close()

    asyncio.run(_ask())


@app.command()
def chat(
    api_url: str | None = _api_url_option(),
    timeout: float | None = _timeout_option(),
    chart_dir: Path | None = typer.Option(
        None,
        "--chart-dir",
        file_okay=False,
        help="Directory for returned charts (default: FINCHAT_CHART_DIR or temp dir)"
    ),
):
    """Interactive line-by-line chat in the console."""
    async def _chat():
        client = get_client(console, api_url=api_url, timeout=timeout)
        charts = get_chart_dir(chart_dir)
        session = ChatSession(client)

        try:
            console.print("[bold cyan]AI Financial Analyst[/bold cyan]")
            console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
            greeting = session.last_response()
            if greeting is not None:
                _print_reply(greeting, charts)

            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue

                if user_input.strip().lower() in EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break

                with console.status("[dim]Analyzing...[/dim]"):
                    reply = await session.send(user_input)
                if reply is not None:
                    _print_reply(reply, charts)
        finally:
            await client.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    api_url: str | None = _api_url_option(),
    timeout: float | None = _timeout_option(),
    chart_dir: Path | None = typer.Option(
        None,
        "--chart-dir",
        file_okay=False,
        help="Directory for returned charts (default: FINCHAT_CHART_DIR or temp dir)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        client = get_client(console, api_url=api_url, timeout=timeout)
        try:
            await run_textual_tui(
                client=client,
                chart_dir=get_chart_dir(chart_dir),
                log_level=log_level,
            )
        finally:
            await client.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def health(
    api_url: str | None = _api_url_option(),
    timeout: float | None = _timeout_option(),
):
    """Show configuration and check that the service answers."""
    async def _health():
        resolved_timeout = get_timeout(timeout, console)
        chart_dir = get_chart_dir()

        table = Table(show_header=False, box=None)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        table.add_row("Endpoint", get_api_url(api_url))
        table.add_row("Timeout", f"{resolved_timeout}s" if resolved_timeout else "none")
        table.add_row("Chart directory", str(chart_dir))
        console.print(table)
        console.print()

        client = get_client(console, api_url=api_url, timeout=timeout)
        try:
            status = await client.ping()
        except AnalystServiceError as e:
            console.print(f"[red]x[/red] Service: UNREACHABLE ({escape(str(e))})")
            raise typer.Exit(code=1)
        finally:
            await client.close()

        console.print(f"[green]+[/green] Service: REACHABLE (HTTP {status})")

    asyncio.run(_health())


if __name__ == "__main__":
    app()

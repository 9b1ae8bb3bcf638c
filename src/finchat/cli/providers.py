"""Configuration helpers for CLI.

Centralizes creation of the analyst client and chart directory from
environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path

import typer
from rich.console import Console

from ..client import API_URL, AnalystClient, create_analyst_client
from ..ui.config import DEFAULT_CHART_DIR

# Default console for output
_console = Console()


def get_api_url(override: str | None = None) -> str:
    """Resolve the service endpoint.

    Environment variables:
        FINCHAT_API_URL: Endpoint receiving questions (default: hosted service)
    """
    return override or os.getenv("FINCHAT_API_URL") or API_URL


def get_timeout(override: float | None = None, console: Console | None = None) -> float | None:
    """Resolve the request timeout in seconds, None meaning no timeout.

    Raises:
        SystemExit: If FINCHAT_TIMEOUT is set but not a positive number

    Environment variables:
        FINCHAT_TIMEOUT: Seconds to wait for an answer (default: unset, wait forever)
    """
    if override is not None:
        return override

    raw = os.getenv("FINCHAT_TIMEOUT", "").strip()
    if not raw:
        return None

    con = console or _console
    try:
        timeout = float(raw)
    except ValueError:
        con.print(f"[red]Error: FINCHAT_TIMEOUT must be a number, got {raw!r}[/red]")
        raise typer.Exit(code=1)

    if timeout <= 0:
        con.print("[red]Error: FINCHAT_TIMEOUT must be greater than zero[/red]")
        raise typer.Exit(code=1)
    return timeout


def get_chart_dir(override: Path | None = None) -> Path:
    """Resolve where returned charts are saved.

    Environment variables:
        FINCHAT_CHART_DIR: Chart directory (default: <tempdir>/finchat-charts)
    """
    if override is not None:
        return override
    env_dir = os.getenv("FINCHAT_CHART_DIR")
    return Path(env_dir) if env_dir else DEFAULT_CHART_DIR


def get_client(
    console: Console | None = None,
    api_url: str | None = None,
    timeout: float | None = None,
) -> AnalystClient:
    """Create the analyst client from options and environment variables.

    Args:
        console: Optional Rich console for output
        api_url: Endpoint overriding FINCHAT_API_URL
        timeout: Timeout overriding FINCHAT_TIMEOUT

    Returns:
        HTTP analyst client instance
    """
    return create_analyst_client(
        "http",
        api_url=get_api_url(api_url),
        timeout=get_timeout(timeout, console),
    )

"""Worklog gateway CLI: entry-point for running and inspecting the gateway.

Usage:
    python cli/main.py --help

Commands:
    serve     → run the HTTP gateway under uvicorn
    routes    → print the forwarding table
    config    → print the resolved settings
    check     → probe the configured backend
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from gateway.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from dataclasses import asdict
from typing import Optional

import httpx
import typer

from gateway.config import settings
from gateway.proxy import ROUTES, ForwardRoute

app = typer.Typer(
    name="worklog-gateway",
    help="Worklog gateway CLI.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _route_line(route: ForwardRoute) -> str:
    needs = [f"?{name}" for name in route.required_query]
    needs += list(route.required_fields)
    auth = "auth" if route.requires_auth else "open"
    line = f"  {route.method:<6} /api{route.path:<26} → {route.backend_path:<26} [{auth}]"
    if needs:
        line += "  requires: " + ", ".join(needs)
    return line


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: GATEWAY_HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (default: GATEWAY_PORT)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the gateway HTTP server."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"[serve] Forwarding to {settings.api_base_url}")
    typer.echo(f"[serve] Listening on http://{bind_host}:{bind_port}")
    uvicorn.run("gateway.api.app:app", host=bind_host, port=bind_port, reload=reload)


@app.command("routes")
def routes() -> None:
    """List every forwarded operation."""
    typer.echo(f"[routes] {len(ROUTES)} route(s), backend {settings.api_base_url}")
    for route in ROUTES:
        typer.echo(_route_line(route))


@app.command("config")
def show_config() -> None:
    """Print the settings the gateway would run with."""
    for key, value in asdict(settings).items():
        typer.echo(f"  {key:<20} {value}")


@app.command("check")
def check(
    timeout: Optional[float] = typer.Option(None, help="Seconds to wait (default: REQUEST_TIMEOUT)."),
) -> None:
    """Send one GET to the backend base URL and report whether it answers."""
    url = settings.api_base_url
    typer.echo(f"[check] GET {url} …")
    try:
        with httpx.Client(timeout=timeout or settings.request_timeout) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        typer.echo(f"[check] ✗ Backend unreachable: {exc!r:.120}")
        raise typer.Exit(1)
    typer.echo(f"[check] ✓ Backend answered HTTP {response.status_code}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

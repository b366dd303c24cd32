"""Command line: serve the API, make one call, or run the demo checks."""

from __future__ import annotations

from typing import Callable

import typer
from rich.console import Console
from rich.table import Table

from calcrpc.config import get_settings
from calcrpc.core.errors import CalcRpcError, RemoteFault
from calcrpc.infrastructure.observability import setup_logging
from calcrpc.infrastructure.rpc_client import CalcRpcClient

app = typer.Typer(help="XML-RPC integer calculator: server and client.")
console = Console()

# (label, call, expected)
SELFTEST_CASES: list[tuple[str, Callable[[CalcRpcClient], int], int]] = [
    ("add()", lambda c: c.add(), 0),
    ("add(1, 2, 3, 4, 5)", lambda c: c.add(1, 2, 3, 4, 5), 15),
    ("add(2, 4)", lambda c: c.add(2, 4), 6),
    ("subtract(12, 6)", lambda c: c.subtract(12, 6), 6),
    ("multiply(3, 4)", lambda c: c.multiply(3, 4), 12),
    ("multiply(1, 2, 3, 4, 5)", lambda c: c.multiply(1, 2, 3, 4, 5), 120),
    ("divide(10, 5)", lambda c: c.divide(10, 5), 2),
    ("modulo(10, 5)", lambda c: c.modulo(10, 5), 0),
]


def _make_client(url: str | None) -> CalcRpcClient:
    settings = get_settings()
    return CalcRpcClient(
        url or settings.server_url,
        timeout_seconds=settings.client_timeout_seconds,
    )


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Run the RPC server under uvicorn."""
    import uvicorn

    from calcrpc.main import create_app

    settings = get_settings()
    overrides = {k: v for k, v in (("host", host), ("port", port)) if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)
    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


@app.command("call")
def call(
    operation: str = typer.Argument(..., help="add, subtract, multiply, divide or modulo"),
    args: list[int] | None = typer.Argument(None, help="int32 operands (use -- before negatives)"),
    url: str | None = typer.Option(None, "--url", help="Endpoint URL, e.g. http://localhost:8080/RPC"),
) -> None:
    """Call one operation and print its result."""
    try:
        with _make_client(url) as client:
            result = client.call(operation, *(args or []))
    except RemoteFault as e:
        console.print(f"[red]Fault {e.fault_code}:[/red] {e.fault_string}")
        raise typer.Exit(1)
    except (CalcRpcError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print(str(result))


@app.command("selftest")
def selftest(
    url: str | None = typer.Option(None, "--url", help="Endpoint URL, e.g. http://localhost:8080/RPC"),
) -> None:
    """Run the demo calls against a server and report pass/fail."""
    table = Table(title="calcrpc selftest")
    table.add_column("call", style="cyan")
    table.add_column("expected")
    table.add_column("got")
    table.add_column("ok")

    failures = 0
    with _make_client(url) as client:
        for label, run, expected in SELFTEST_CASES:
            try:
                got = str(run(client))
                ok = got == str(expected)
            except CalcRpcError as e:
                got = e.message
                ok = False
            failures += 0 if ok else 1
            table.add_row(
                label, str(expected), got,
                "[green]yes[/green]" if ok else "[red]no[/red]",
            )
    console.print(table)
    if failures:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

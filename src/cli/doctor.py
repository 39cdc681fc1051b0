"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, write_user_env_vars
from core.domain.errors import AckeeError
from core.services.summary import list_all_domains

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        domains = await list_all_domains(settings=settings)
    except AckeeError as exc:
        return False, str(exc)
    return True, f"{len(domains)} domain(s) visible"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="ackee-summary Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.server:
        table.add_row("Server", "OK", settings.server)
    else:
        table.add_row("Server", "FAIL", "Set ACKEE_SERVER or run `doctor setup`")

    if settings.token:
        table.add_row("Credentials", "OK", "Permanent token")
    elif settings.username and settings.password:
        table.add_row("Credentials", "OK", f"Username/password ({settings.username})")
    else:
        table.add_row("Credentials", "FAIL", "Set ACKEE_TOKEN or ACKEE_USERNAME + ACKEE_PASSWORD")

    table.add_row("Defaults", "OK", f"{settings.default_range.label()}, limit {settings.default_limit}")

    # Connectivity + auth
    ok_api = False
    if settings.server:
        ok_api, detail_api = asyncio.run(_check_api(settings))
        table.add_row("API", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    server = typer.prompt("Ackee server URL", default=settings.server or "", show_default=True).strip()
    if not server:
        raise typer.BadParameter("server is required")

    use_token = typer.confirm("Use a permanent token instead of username/password?", default=True)
    values: dict[str, str | None] = {"ACKEE_SERVER": server}
    # El token tiene prioridad en `authenticate()`: no dejar credenciales de la otra forma.
    if use_token:
        values["ACKEE_TOKEN"] = typer.prompt("Token", hide_input=True).strip()
        unset = ("ACKEE_USERNAME", "ACKEE_PASSWORD")
    else:
        values["ACKEE_USERNAME"] = typer.prompt("Username", default=settings.username or "").strip()
        values["ACKEE_PASSWORD"] = typer.prompt("Password", hide_input=True).strip()
        unset = ("ACKEE_TOKEN",)

    env_path = write_user_env_vars(values, unset=unset)

    _console.print(f"[green]Saved config to:[/green] {env_path}")

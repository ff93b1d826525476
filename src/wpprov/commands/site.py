"""Site provisioning commands."""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from wpprov.audit import audit
from wpprov.config import get_settings
from wpprov.errors import ProvisionError
from wpprov.services import nginx_renderer
from wpprov.services.executor import CommandExecutor
from wpprov.services.locking import StopFlag, site_lock
from wpprov.services.provisioner import Provisioner
from wpprov.services.resolver import load_site

console = Console()

_SECRET_FIELDS = {"admin_password", "options"}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(exc: ProvisionError) -> typer.Exit:
    console.print(f"[red bold]Provisioning failed:[/red bold] {exc}")
    return typer.Exit(exc.exit_code)


def provision(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every external command"),
) -> None:
    """Provision the site named by VVV_SITE_NAME at VVV_PATH_TO_SITE."""
    _configure_logging(verbose)
    settings = get_settings()
    stop = StopFlag()
    stop.install_signal_handlers()

    try:
        site = load_site(settings)
        console.print(
            f" * Custom site template provisioner {site.site_id} - downloads and installs "
            f"a copy of WP {site.wp_version} for {site.domain}"
        )
        with site_lock(settings.lock_file, site.site_id):
            with audit("site.provision", install_mode=site.install_mode.value) as event:
                executor = CommandExecutor(settings.sandbox)
                report = Provisioner(site, settings, executor, stop=stop).run()
                event.params["actions"] = [a.describe() for a in report.actions]
                event.params["warnings"] = report.warnings
    except ProvisionError as exc:
        raise _fail(exc) from exc

    for warning in report.warnings:
        console.print(f"[yellow]warning:[/yellow] {warning}")
    terminal = report.terminal_action
    console.print(
        f"\n[green bold]Done![/green bold] Site template provisioner script completed for {site.site_id}"
        f" ({terminal.describe() if terminal else 'no action'})"
    )


def nginx() -> None:
    """Render the site's nginx config without touching WordPress."""
    settings = get_settings()
    try:
        site = load_site(settings)
        with audit("site.nginx", live_url=site.live_url or ""):
            text = nginx_renderer.render(settings, site.live_url)
            nginx_renderer.write_config(settings.nginx_output, text)
    except ProvisionError as exc:
        raise _fail(exc) from exc
    console.print(f"[green]Wrote {settings.nginx_output}[/green]")


def show() -> None:
    """Print the resolved site configuration."""
    settings = get_settings()
    try:
        site = load_site(settings)
    except ProvisionError as exc:
        raise _fail(exc) from exc

    table = Table(title=f"Site {site.site_id}")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in site.model_dump(mode="json").items():
        if name in _SECRET_FIELDS and value:
            value = "****"
        elif isinstance(value, list):
            value = ", ".join("=".join(v) if isinstance(v, list) else str(v) for v in value)
        table.add_row(name, str(value))
    console.print(table)

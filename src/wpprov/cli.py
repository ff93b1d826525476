"""Root Typer application for the wpprov CLI."""

from __future__ import annotations

import typer

from wpprov.commands import site

app = typer.Typer(
    name="wpprov",
    help="Provision a WordPress site inside a VVV environment.",
    no_args_is_help=True,
)

app.command(name="provision")(site.provision)
app.command(name="nginx")(site.nginx)
app.command(name="show")(site.show)

if __name__ == "__main__":
    app()

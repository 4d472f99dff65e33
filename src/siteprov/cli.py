"""Root Typer application for the siteprov CLI."""

from __future__ import annotations

import typer

from siteprov.commands import check, provision, show
from siteprov.logs import configure_logging

app = typer.Typer(
    name="siteprov",
    help="Provision a single nginx web server with a placeholder site and HTTPS.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    configure_logging(verbose)


app.command(name="provision")(provision.provision)
app.command(name="check")(check.check)
app.command(name="show-config")(show.show_config)

if __name__ == "__main__":
    app()

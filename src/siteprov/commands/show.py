"""Show the vhost the current settings would produce."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from siteprov.config import get_settings
from siteprov.services import network, renderer

console = Console()


def show_config(
    server_name: Optional[str] = typer.Option(
        None, help="Server name to render (default: DOMAIN, else detected public IP)"
    ),
) -> None:
    """Render the NGINX vhost without touching the host."""
    settings = get_settings()
    if server_name is None:
        ip = "" if settings.domain else network.detect_public_ip()
        server_name = network.resolve_server_name(settings.domain, ip)
    content = renderer.render_vhost(settings, server_name)
    console.print(Syntax(content, "nginx", theme="monokai"))

"""Re-run the post-deployment checks against an already provisioned host."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from siteprov.config import get_settings
from siteprov.models import TlsMode
from siteprov.services import network, nginx, report

console = Console()
log = logging.getLogger(__name__)


def check() -> None:
    """Probe local and public HTTPS and print the summary report."""
    settings = get_settings()
    conf = nginx.find_site_conf(settings.nginx_dir, settings.site_name)
    if conf is None:
        log.error("no nginx config found for %s; run siteprov provision first", settings.site_name)
        raise typer.Exit(1)

    tls_mode = TlsMode.SELF_SIGNED
    if nginx.uses_letsencrypt(conf.read_text()):
        tls_mode = TlsMode.LETSENCRYPT

    public_ip = network.detect_public_ip()
    result = report.build_report(settings, public_ip, tls_mode, [])
    report.render_report(result, console)

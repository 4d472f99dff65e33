"""Provision command: nginx, placeholder site, TLS and a final report."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from siteprov.config import SiteSettings, get_settings
from siteprov.constants import BASE_PACKAGES
from siteprov.errors import ProvisionError
from siteprov.models import ProvisionReport, TlsMode
from siteprov.services import certs, host, network, nginx, packages, renderer, report, system

console = Console()
log = logging.getLogger(__name__)

_TOTAL = 8


def _step(n: int, message: str) -> None:
    console.print(f"[bold][{n}/{_TOTAL}][/bold] {message}")


def run_provision(settings: SiteSettings) -> ProvisionReport:
    """Run every provisioning stage in order and return the final report.

    Fatal problems raise ProvisionError; best-effort failures end up in
    ``ProvisionReport.warnings``.
    """
    warnings: list[str] = []

    _step(1, "Installing packages")
    manager = host.detect_package_manager()
    packages.ensure_installed(manager, BASE_PACKAGES)
    profile = host.detect_host_profile(settings.nginx_dir, manager)
    if settings.has_domain:
        warnings.extend(packages.ensure_certbot(profile).warnings)

    _step(2, "Removing default nginx site and starting nginx")
    nginx.remove_default_sites(settings.nginx_dir)
    nginx.ensure_service_active()

    _step(3, f"Writing site content to {settings.web_root}")
    html = renderer.render_index(settings, system.hostname())
    renderer.ensure_file_content(settings.index_path, html)
    system.set_web_permissions(settings.web_root)

    _step(4, "Writing nginx config")
    public_ip = network.detect_public_ip()
    server_name = network.resolve_server_name(settings.domain, public_ip)
    conf_path = profile.conf_path(settings.site_name)
    renderer.ensure_file_content(conf_path, renderer.render_vhost(settings, server_name))
    nginx.ensure_enabled(profile, conf_path, settings.site_name)

    _step(5, "Generating self-signed certificate")
    certs.generate_self_signed(settings, server_name)

    _step(6, "Validating config and restarting nginx")
    nginx.validate_config()
    nginx.restart()

    _step(7, "Let's Encrypt")
    issued = certs.obtain_letsencrypt(settings)
    warnings.extend(issued.warnings)
    tls_mode = TlsMode.SELF_SIGNED
    if issued.ok:
        tls_mode = TlsMode.LETSENCRYPT
        if not nginx.reload():
            warnings.append("nginx reload after Let's Encrypt failed")

    _step(8, "Running checks")
    return report.build_report(settings, public_ip, tls_mode, warnings)


def provision() -> None:
    """Install nginx, publish a placeholder site and set up HTTPS on this host."""
    settings = get_settings()
    try:
        system.require_root()
        result = run_provision(settings)
    except ProvisionError as exc:
        log.error("%s", exc)
        raise typer.Exit(exc.exit_code)

    report.render_report(result, console)

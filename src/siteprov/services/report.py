"""Post-deployment verification and the final summary block."""

from __future__ import annotations

import logging

import httpx
from rich.console import Console
from rich.markup import escape

from siteprov.config import SiteSettings
from siteprov.constants import LOCAL_PROBE_TIMEOUT, PUBLIC_PROBE_TIMEOUT
from siteprov.models import ProvisionReport, Reachability, TlsMode
from siteprov.services import network, nginx, system

log = logging.getLogger(__name__)

_RULE = "=" * 40
_THIN_RULE = "-" * 40

_TLS_LABELS = {
    TlsMode.SELF_SIGNED: "self-signed (browser warning expected)",
    TlsMode.LETSENCRYPT: "letsencrypt",
}


def public_url(settings: SiteSettings, public_ip: str) -> str:
    if settings.domain:
        return network.url_for(settings.domain)
    if public_ip:
        return network.url_for(public_ip)
    return "https://<public-ip>"


def verify(
    settings: SiteSettings,
    public_ip: str,
    client: httpx.Client | None = None,
) -> tuple[bool, bool | None]:
    """Probe loopback and, when a domain or IP is known, the public address.

    The public result is None when there was nothing to probe.
    """
    local_ok = network.probe_https("https://127.0.0.1", LOCAL_PROBE_TIMEOUT, client)
    public_ok: bool | None = None
    if settings.domain or public_ip:
        public_ok = network.probe_https(
            public_url(settings, public_ip), PUBLIC_PROBE_TIMEOUT, client
        )
    log.info("local check: %s, public check: %s", local_ok, public_ok)
    return local_ok, public_ok


def build_report(
    settings: SiteSettings,
    public_ip: str,
    tls_mode: TlsMode,
    warnings: list[str],
    client: httpx.Client | None = None,
) -> ProvisionReport:
    local_ok, public_ok = verify(settings, public_ip, client)
    return ProvisionReport(
        site_name=settings.site_name,
        directory=str(settings.web_root),
        timestamp=settings.timestamp,
        storage=system.disk_usage(),
        service_status=nginx.service_status(),
        public_ip=public_ip,
        url=public_url(settings, public_ip),
        tls_mode=tls_mode,
        local_ok=local_ok,
        public_ok=public_ok,
        reachability=network.classify(local_ok, public_ok),
        warnings=list(warnings),
    )


def _yes_no(value: bool | None) -> str:
    if value is None:
        return "skipped"
    return "yes" if value else "no"


def guidance(report: ProvisionReport) -> list[str]:
    """Remediation lines for the report's reachability state."""
    if report.reachability is Reachability.REACHABLE:
        return ["[green]SUCCESS:[/green] Website is accessible from the internet."]

    if report.reachability is Reachability.LOCAL_ONLY:
        lines = ["[yellow]NOTE:[/yellow] nginx answers locally but the public URL did not respond."]
        lines.append("1. Ensure the firewall / cloud security group allows ports 80 AND 443.")
        if report.public_ok is None:
            lines.append("2. No domain or public IP was detected; browse to the server's address directly.")
        elif report.tls_mode is TlsMode.SELF_SIGNED:
            lines.append("2. Accept the 'Self-Signed' warning in your browser.")
        else:
            lines.append("2. Check that DNS for the domain points at this server.")
        return lines

    return [
        "[red]WARNING:[/red] nginx did not answer HTTPS even on 127.0.0.1.",
        "1. Check the service: systemctl status nginx",
        "2. Check the config: nginx -t",
        "3. Check the logs: journalctl -u nginx",
    ]


def render_report(report: ProvisionReport, console: Console) -> None:
    """Print the fixed-format summary block."""
    console.print()
    console.print(_RULE)
    console.print(" [bold]SETUP COMPLETE[/bold]")
    console.print(_RULE)
    console.print(f" Site Name  : {report.site_name}", markup=False)
    console.print(f" Directory  : {report.directory}", markup=False)
    console.print(f" Deployed   : {report.timestamp}", markup=False)
    console.print(f" Storage    : {report.storage}", markup=False)
    console.print(f" Service    : {report.service_status}", markup=False)
    console.print(f" Public IP  : {report.public_ip or 'unknown'}", markup=False)
    console.print(f" URL        : {report.url}", markup=False)
    console.print(f" TLS Mode   : {_TLS_LABELS[report.tls_mode]}", markup=False)
    console.print(f" Local Check: {_yes_no(report.local_ok)}", markup=False)
    console.print(f" Ext. Check : {_yes_no(report.public_ok)}", markup=False)
    console.print(_THIN_RULE)
    for warning in report.warnings:
        console.print(f"[yellow]warn:[/yellow] {escape(warning)}")
    for line in guidance(report):
        console.print(line)
    console.print(_RULE)

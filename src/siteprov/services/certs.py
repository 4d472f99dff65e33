"""Self-signed and Let's Encrypt certificate handling."""

from __future__ import annotations

import logging

from siteprov.config import SiteSettings
from siteprov.constants import CERT_DAYS, CERT_KEY_BITS
from siteprov.models import StepResult
from siteprov.services import system

log = logging.getLogger(__name__)


def generate_self_signed(settings: SiteSettings, server_name: str) -> None:
    """Write a fresh self-signed key/cert pair for ``server_name``.

    Always runs so nginx can start TLS even without a real domain.
    Raises CommandError if openssl fails.
    """
    settings.ssl_dir.mkdir(parents=True, exist_ok=True)
    system.run(
        [
            "openssl", "req", "-x509", "-nodes",
            "-newkey", f"rsa:{CERT_KEY_BITS}",
            "-keyout", str(settings.key_path),
            "-out", str(settings.cert_path),
            "-days", str(CERT_DAYS),
            "-subj", f"/CN={server_name}",
        ]
    )
    log.info("self-signed certificate written to %s", settings.cert_path)


def certbot_cmd(domain: str, email: str) -> list[str]:
    return [
        "certbot", "--nginx",
        "-d", domain,
        "-m", email,
        "--agree-tos", "--non-interactive", "--redirect",
    ]


def obtain_letsencrypt(settings: SiteSettings) -> StepResult:
    """Try to swap in a Let's Encrypt certificate. Never raises.

    On any failure the self-signed certificate stays referenced.
    """
    name = "letsencrypt"
    if not settings.has_domain:
        return StepResult(name=name, ok=False, skipped=True)
    if not settings.email:
        log.warning("no EMAIL provided, skipping LetsEncrypt")
        return StepResult.skip(name, "no EMAIL provided, Let's Encrypt skipped")
    if not system.has("certbot"):
        log.warning("no certbot found, skipping LetsEncrypt")
        return StepResult.skip(name, "certbot not installed, Let's Encrypt skipped")

    log.info("attempting LetsEncrypt for %s", settings.domain)
    result = system.run(certbot_cmd(settings.domain, settings.email), check=False)
    if result.returncode != 0:
        log.warning("LetsEncrypt failed, falling back to self-signed: %s", result.stderr.strip())
        return StepResult.failed(name, "Let's Encrypt issuance failed, using self-signed certificate")
    log.info("LetsEncrypt success")
    return StepResult(name=name)

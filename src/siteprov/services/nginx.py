"""NGINX service control, config validation and site enabling."""

from __future__ import annotations

import logging
from pathlib import Path

from siteprov.constants import NGINX_SERVICE
from siteprov.errors import CommandError, NginxConfigError, ServiceNotActiveError
from siteprov.models import HostProfile
from siteprov.services import system

log = logging.getLogger(__name__)

LETSENCRYPT_MARKER = "/etc/letsencrypt/live/"


def remove_default_sites(nginx_dir: Path) -> list[Path]:
    """Remove the distribution's welcome site so ours answers on 80/443."""
    removed = []
    for path in (nginx_dir / "sites-enabled" / "default", nginx_dir / "conf.d" / "default.conf"):
        if path.is_symlink() or path.exists():
            path.unlink()
            removed.append(path)
            log.info("removed %s", path)
    return removed


def is_active(service: str = NGINX_SERVICE) -> bool:
    result = system.run(["systemctl", "is-active", "--quiet", service], check=False)
    return result.returncode == 0


def service_status(service: str = NGINX_SERVICE) -> str:
    """systemctl's view of ``service``; "unknown" when systemctl is unavailable."""
    try:
        result = system.run(["systemctl", "is-active", service], check=False)
    except CommandError as exc:
        log.debug("cannot query %s: %s", service, exc)
        return "unknown"
    return result.stdout.strip() or "unknown"


def ensure_service_active(service: str = NGINX_SERVICE) -> None:
    """Enable and start ``service`` unless it is already running."""
    if not is_active(service):
        log.info("starting %s", service)
        system.run(["systemctl", "enable", "--now", service])
    if not is_active(service):
        raise ServiceNotActiveError(f"{service} failed to start")


def validate_config() -> None:
    """Run nginx -t. Raises NginxConfigError on failure."""
    result = system.run(["nginx", "-t"], check=False)
    if result.returncode != 0:
        raise NginxConfigError(f"NGINX config test failed:\n{result.stderr}")


def restart(service: str = NGINX_SERVICE) -> None:
    system.run(["systemctl", "restart", service])


def reload(service: str = NGINX_SERVICE) -> bool:
    """Reload without raising; returns whether the reload succeeded."""
    result = system.run(["systemctl", "reload", service], check=False)
    if result.returncode != 0:
        log.warning("%s reload failed: %s", service, result.stderr.strip())
        return False
    return True


def ensure_enabled(profile: HostProfile, conf_path: Path, site_name: str) -> Path | None:
    """Symlink the site into sites-enabled where the layout has one."""
    link = profile.enabled_link(site_name)
    if link is None:
        return None
    if link.is_symlink() or link.exists():
        if link.is_symlink() and link.resolve() == conf_path.resolve():
            return link
        link.unlink()
    link.symlink_to(conf_path)
    log.info("enabled %s", link)
    return link


def find_site_conf(nginx_dir: Path, site_name: str) -> Path | None:
    """Locate an existing vhost for ``site_name`` under either layout."""
    for path in (nginx_dir / "sites-available" / site_name, nginx_dir / "conf.d" / f"{site_name}.conf"):
        if path.is_file():
            return path
    return None


def uses_letsencrypt(conf_text: str) -> bool:
    return LETSENCRYPT_MARKER in conf_text

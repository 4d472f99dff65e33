"""Host profile detection."""

from __future__ import annotations

import logging
from pathlib import Path

from siteprov.errors import PackageManagerNotFoundError
from siteprov.models import HostProfile, NginxLayout, PackageManager
from siteprov.services import system

log = logging.getLogger(__name__)

# Fixed preference order.
_MANAGERS = (PackageManager.APT, PackageManager.DNF, PackageManager.YUM)


def detect_package_manager() -> PackageManager:
    for manager in _MANAGERS:
        if system.has(manager.binary):
            log.debug("package manager: %s", manager.value)
            return manager
    raise PackageManagerNotFoundError("no apt/yum/dnf found")


def detect_nginx_layout(nginx_dir: Path) -> NginxLayout:
    if (nginx_dir / "sites-available").is_dir():
        return NginxLayout.SITES_AVAILABLE
    return NginxLayout.CONF_D


def detect_host_profile(nginx_dir: Path, manager: PackageManager | None = None) -> HostProfile:
    """Build the host profile.

    The nginx layout only exists once nginx is installed, so callers that
    install packages detect the manager first and pass it in.
    """
    manager = manager or detect_package_manager()
    profile = HostProfile(
        package_manager=manager,
        nginx_layout=detect_nginx_layout(nginx_dir),
        nginx_dir=nginx_dir,
        has_sites_enabled=(nginx_dir / "sites-enabled").is_dir(),
        has_amazon_linux_extras=system.has("amazon-linux-extras"),
    )
    log.info(
        "host profile: %s, nginx layout %s",
        profile.package_manager.value,
        profile.nginx_layout.value,
    )
    return profile

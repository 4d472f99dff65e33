"""System package installation across apt, dnf and yum."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from siteprov.constants import CERTBOT_PACKAGES
from siteprov.errors import CommandError
from siteprov.models import HostProfile, PackageManager, StepResult
from siteprov.services import system

log = logging.getLogger(__name__)


def missing_packages(packages: Iterable[str]) -> list[str]:
    """Packages whose same-named binary is not on PATH."""
    return [p for p in packages if not system.has(p)]


def _install_cmd(manager: PackageManager, packages: list[str]) -> list[str]:
    return [manager.binary, "install", "-y", *packages]


def install(manager: PackageManager, packages: Iterable[str]) -> None:
    """Hand ``packages`` to the package manager. Raises CommandError on failure."""
    packages = list(packages)
    log.info("installing %s via %s", ", ".join(packages), manager.value)
    env = None
    if manager is PackageManager.APT:
        env = {**os.environ, "DEBIAN_FRONTEND": "noninteractive"}
        system.run(["apt-get", "update", "-y"], env=env)
    system.run(_install_cmd(manager, packages), env=env)


def ensure_installed(manager: PackageManager, packages: Iterable[str]) -> list[str]:
    """Install whichever of ``packages`` are missing. Returns what was installed.

    Raises CommandError if the package manager fails.
    """
    packages = list(packages)
    missing = missing_packages(packages)
    if not missing:
        log.info("packages already present: %s", ", ".join(packages))
        return []
    install(manager, missing)
    return missing


def ensure_certbot(profile: HostProfile) -> StepResult:
    """Best-effort certbot install, identical on every package manager.

    The nginx plugin has no binary to look for, so both packages always go
    to the package manager, which skips what is already installed.
    """
    warnings: list[str] = []
    if profile.package_manager is PackageManager.YUM and profile.has_amazon_linux_extras:
        epel = system.run(["amazon-linux-extras", "install", "epel", "-y"], check=False)
        if epel.returncode != 0:
            log.warning("enabling EPEL via amazon-linux-extras failed")
            warnings.append("enabling EPEL via amazon-linux-extras failed")

    try:
        install(profile.package_manager, CERTBOT_PACKAGES)
    except CommandError as exc:
        log.warning("certbot install failed: %s", exc)
        warnings.append(f"certbot install failed: {exc}")
        return StepResult(name="certbot-install", ok=False, warnings=warnings)
    return StepResult(name="certbot-install", warnings=warnings)

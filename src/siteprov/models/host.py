"""Host profile: package manager family and NGINX layout, detected once."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class PackageManager(str, Enum):
    APT = "apt"
    DNF = "dnf"
    YUM = "yum"

    @property
    def binary(self) -> str:
        return "apt-get" if self is PackageManager.APT else self.value


class NginxLayout(str, Enum):
    SITES_AVAILABLE = "sites-available"
    CONF_D = "conf.d"


class HostProfile(BaseModel):
    """Conventions of the host being provisioned."""

    model_config = ConfigDict(frozen=True)

    package_manager: PackageManager
    nginx_layout: NginxLayout
    nginx_dir: Path = Path("/etc/nginx")
    has_sites_enabled: bool = False
    has_amazon_linux_extras: bool = False

    def conf_path(self, site_name: str) -> Path:
        if self.nginx_layout is NginxLayout.SITES_AVAILABLE:
            return self.nginx_dir / "sites-available" / site_name
        return self.nginx_dir / "conf.d" / f"{site_name}.conf"

    def enabled_link(self, site_name: str) -> Path | None:
        if not self.has_sites_enabled:
            return None
        return self.nginx_dir / "sites-enabled" / site_name

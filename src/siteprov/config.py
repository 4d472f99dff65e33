"""Site configuration resolved once from the environment."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, model_validator

from siteprov.constants import (
    DEFAULT_SITE_NAME,
    DEFAULT_TZ,
    NGINX_DIR,
    SSL_DIR,
    TIMESTAMP_FORMAT,
    WEB_ROOT_BASE,
)


def _env(name: str, default: str = "") -> str:
    # Empty values count as unset, like ${VAR:-default}.
    return os.environ.get(name) or default


def format_timestamp(tz: str, now: datetime | None = None) -> str:
    """Format ``now`` in zone ``tz``; unknown zones fall back to UTC."""
    try:
        zone: Any = ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        zone = timezone.utc
    now = now or datetime.now(timezone.utc)
    return now.astimezone(zone).strftime(TIMESTAMP_FORMAT)


class SiteSettings(BaseModel):
    """Runtime configuration for one provisioning run. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    site_name: str
    web_root: Path
    tz: str
    timestamp: str
    domain: str = Field(default_factory=lambda: _env("DOMAIN"))
    email: str = Field(default_factory=lambda: _env("EMAIL"))
    nginx_dir: Path = Field(default=NGINX_DIR)
    ssl_dir: Path = Field(default=SSL_DIR)

    @model_validator(mode="before")
    @classmethod
    def _derive_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        site = data.get("site_name") or _env("SITE_NAME", DEFAULT_SITE_NAME)
        data["site_name"] = site
        if not data.get("web_root"):
            data["web_root"] = _env("WEB_ROOT", str(WEB_ROOT_BASE / site))
        tz = data.get("tz") or _env("TZ", DEFAULT_TZ)
        data["tz"] = tz
        if not data.get("timestamp"):
            data["timestamp"] = format_timestamp(tz)
        return data

    @property
    def has_domain(self) -> bool:
        return bool(self.domain)

    @property
    def wants_letsencrypt(self) -> bool:
        return bool(self.domain and self.email)

    @property
    def cert_path(self) -> Path:
        return self.ssl_dir / f"{self.site_name}.crt"

    @property
    def key_path(self) -> Path:
        return self.ssl_dir / f"{self.site_name}.key"

    @property
    def index_path(self) -> Path:
        return self.web_root / "index.html"


@lru_cache(maxsize=1)
def get_settings() -> SiteSettings:
    """Return the global SiteSettings (resolved once, cached)."""
    return SiteSettings()

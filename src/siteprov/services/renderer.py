"""Jinja2-based renderer for the placeholder page and NGINX vhost."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from siteprov.config import SiteSettings

log = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_env() -> Environment:
    # Values come from local configuration, so nothing is escaped.
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_index(settings: SiteSettings, hostname: str) -> str:
    """Render the static placeholder index.html."""
    template = _get_env().get_template("index.html.j2")
    return template.render(settings=settings, hostname=hostname)


def render_vhost(settings: SiteSettings, server_name: str) -> str:
    """Render the vhost: HTTP redirect block plus the TLS server block."""
    template = _get_env().get_template("vhost.conf.j2")
    return template.render(settings=settings, server_name=server_name)


def ensure_file_content(path: Path, content: str) -> bool:
    """Write ``content`` to ``path`` unless it already matches. Returns True if written."""
    if path.is_file() and path.read_text(encoding="utf-8") == content:
        log.debug("%s unchanged", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    log.info("wrote %s", path)
    return True

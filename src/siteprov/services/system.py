"""Subprocess wrapper and small host queries."""

from __future__ import annotations

import logging
import math
import os
import pwd
import shutil
import socket
import subprocess
from pathlib import Path

from siteprov.constants import WEB_USERS
from siteprov.errors import CommandError, NotRootError

log = logging.getLogger(__name__)


def run(
    cmd: list[str],
    *,
    check: bool = True,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    log.debug("running: %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture,
            text=True,
            env=env,
        )
    except subprocess.CalledProcessError as exc:
        raise CommandError(
            f"Command failed: {' '.join(cmd)}\nstderr: {exc.stderr}"
        ) from exc
    except FileNotFoundError as exc:
        raise CommandError(f"Command not found: {cmd[0]}", exit_code=127) from exc


def has(binary: str) -> bool:
    return shutil.which(binary) is not None


def require_root(command: str = "siteprov provision") -> None:
    if os.geteuid() != 0:
        raise NotRootError(f"run: sudo {command}")


def hostname() -> str:
    """Fully qualified host name, or the short one if it cannot be resolved."""
    try:
        name = socket.getfqdn()
    except OSError:
        name = ""
    return name or socket.gethostname()


def _human(size: float) -> str:
    for unit in ("B", "K", "M", "G", "T"):
        if size < 1024 or unit == "T":
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}T"


def disk_usage(path: Path = Path("/")) -> str:
    """``df -h``-style summary: '<free> free of <total> (<pct>% used)'."""
    try:
        usage = shutil.disk_usage(path)
    except OSError:
        return "unknown"
    pct = math.ceil(usage.used * 100 / usage.total) if usage.total else 0
    return f"{_human(usage.free)} free of {_human(usage.total)} ({pct}% used)"


def _web_user() -> pwd.struct_passwd | None:
    for name in WEB_USERS:
        try:
            return pwd.getpwnam(name)
        except KeyError:
            continue
    return None


def set_web_permissions(root: Path, mode: int = 0o755) -> None:
    """Hand ``root`` to the web server account (if one exists) and chmod it recursively."""
    user = _web_user()
    paths = [root]
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        paths.extend(base / n for n in dirnames)
        paths.extend(base / n for n in filenames)
    for p in paths:
        if user is not None:
            try:
                os.chown(p, user.pw_uid, user.pw_gid)
            except PermissionError:
                log.debug("cannot chown %s to %s", p, user.pw_name)
        p.chmod(mode)

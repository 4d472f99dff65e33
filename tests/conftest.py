"""Shared test fixtures."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from siteprov.config import SiteSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SITE_NAME", "WEB_ROOT", "DOMAIN", "EMAIL", "TZ"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings(tmp_path: Path):
    """Factory for SiteSettings rooted in temp directories."""

    def _make(**overrides) -> SiteSettings:
        values = dict(
            site_name="demo",
            web_root=tmp_path / "www" / "demo",
            tz="UTC",
            timestamp="2026-01-01 12:00:00 UTC",
            nginx_dir=tmp_path / "nginx",
            ssl_dir=tmp_path / "ssl",
        )
        values.update(overrides)
        return SiteSettings(**values)

    return _make


@pytest.fixture
def settings(make_settings) -> SiteSettings:
    return make_settings()


class FakeRunner:
    """Stands in for system.run: records commands, answers from a table."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.envs: list[dict | None] = []
        self.returncodes: dict[str, int] = {}
        self.stdout: dict[str, str] = {}
        self.queued: dict[str, list[int]] = {}

    def fail(self, prefix: str, code: int = 1) -> None:
        self.returncodes[prefix] = code

    def queue(self, prefix: str, *codes: int) -> None:
        """Return ``codes`` in order for ``prefix``, then fall back to the table."""
        self.queued[prefix] = list(codes)

    def _lookup(self, table: dict, cmd: list[str], default):
        joined = " ".join(cmd)
        for prefix, value in table.items():
            if joined.startswith(prefix):
                return value
        return default

    def commands(self) -> list[str]:
        return [" ".join(c) for c in self.calls]

    def __call__(self, cmd, *, check=True, capture=True, env=None):
        from siteprov.errors import CommandError

        self.calls.append(list(cmd))
        self.envs.append(env)
        code = self._lookup(self.returncodes, cmd, 0)
        pending = self._lookup(self.queued, cmd, [])
        if pending:
            code = pending.pop(0)
        out = self._lookup(self.stdout, cmd, "")
        if cmd[0] == "openssl" and code == 0:
            for flag in ("-keyout", "-out"):
                Path(cmd[cmd.index(flag) + 1]).write_text("PEM")
        if check and code != 0:
            raise CommandError(f"Command failed: {' '.join(cmd)}\nstderr: boom")
        return subprocess.CompletedProcess(cmd, code, out, "boom" if code else "")


@pytest.fixture
def fake_run(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("siteprov.services.system.run", runner)
    return runner


@pytest.fixture
def binaries(monkeypatch) -> set[str]:
    """Set of binaries system.has() reports as present; mutate in tests."""
    present: set[str] = set()
    monkeypatch.setattr("siteprov.services.system.has", lambda name: name in present)
    return present

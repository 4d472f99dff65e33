"""Step outcomes and the end-of-run report."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class TlsMode(str, Enum):
    SELF_SIGNED = "self-signed"
    LETSENCRYPT = "letsencrypt"


class Reachability(str, Enum):
    REACHABLE = "reachable"
    LOCAL_ONLY = "local-only"
    UNREACHABLE = "unreachable"


class StepResult(BaseModel):
    """Outcome of a best-effort step. Failures become warnings, not exceptions."""

    name: str
    ok: bool = True
    skipped: bool = False
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def failed(cls, name: str, warning: str) -> "StepResult":
        return cls(name=name, ok=False, warnings=[warning])

    @classmethod
    def skip(cls, name: str, warning: str) -> "StepResult":
        return cls(name=name, ok=False, skipped=True, warnings=[warning])


class ProvisionReport(BaseModel):
    """Everything the final summary block prints."""

    site_name: str
    directory: str
    timestamp: str
    storage: str
    service_status: str
    public_ip: str = ""
    url: str
    tls_mode: TlsMode = TlsMode.SELF_SIGNED
    local_ok: bool = False
    public_ok: bool | None = None
    reachability: Reachability = Reachability.UNREACHABLE
    warnings: list[str] = Field(default_factory=list)

"""Pydantic models shared by services and commands."""

from siteprov.models.host import HostProfile, NginxLayout, PackageManager
from siteprov.models.results import ProvisionReport, Reachability, StepResult, TlsMode

__all__ = [
    "HostProfile",
    "NginxLayout",
    "PackageManager",
    "ProvisionReport",
    "Reachability",
    "StepResult",
    "TlsMode",
]

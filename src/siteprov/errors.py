"""Custom exceptions for siteprov."""

from __future__ import annotations


class ProvisionError(Exception):
    """Base exception for all fatal provisioning failures."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class NotRootError(ProvisionError):
    """The command needs superuser privileges."""


class PackageManagerNotFoundError(ProvisionError):
    """None of apt-get, dnf or yum is available."""


class ServiceNotActiveError(ProvisionError):
    """A systemd unit did not reach the active state."""


class NginxConfigError(ProvisionError):
    """NGINX configuration validation failed."""


class CommandError(ProvisionError):
    """An external command exited non-zero."""

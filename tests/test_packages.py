"""Tests for package installation."""

from __future__ import annotations

import pytest

from siteprov.errors import CommandError
from siteprov.models import HostProfile, NginxLayout, PackageManager
from siteprov.services.packages import ensure_certbot, ensure_installed, missing_packages


def _profile(manager: PackageManager, extras: bool = False) -> HostProfile:
    return HostProfile(
        package_manager=manager,
        nginx_layout=NginxLayout.CONF_D,
        has_amazon_linux_extras=extras,
    )


class TestEnsureInstalled:
    def test_skips_when_present(self, fake_run, binaries):
        binaries.update({"nginx", "curl", "openssl"})
        assert ensure_installed(PackageManager.APT, ["nginx", "curl", "openssl"]) == []
        assert fake_run.calls == []

    def test_apt_updates_then_installs_missing(self, fake_run, binaries):
        binaries.add("curl")
        installed = ensure_installed(PackageManager.APT, ["nginx", "curl", "openssl"])
        assert installed == ["nginx", "openssl"]
        assert fake_run.commands() == [
            "apt-get update -y",
            "apt-get install -y nginx openssl",
        ]
        assert fake_run.envs[1]["DEBIAN_FRONTEND"] == "noninteractive"

    @pytest.mark.parametrize("manager", [PackageManager.DNF, PackageManager.YUM])
    def test_rpm_managers_install_directly(self, fake_run, binaries, manager):
        ensure_installed(manager, ["nginx"])
        assert fake_run.commands() == [f"{manager.binary} install -y nginx"]

    def test_failure_raises(self, fake_run, binaries):
        fake_run.fail("dnf install")
        with pytest.raises(CommandError):
            ensure_installed(PackageManager.DNF, ["nginx"])

    def test_missing_checks_binaries(self, binaries):
        binaries.add("nginx")
        assert missing_packages(["nginx", "curl"]) == ["curl"]


class TestEnsureCertbot:
    @pytest.mark.parametrize("manager", list(PackageManager))
    def test_failure_is_a_warning_on_every_manager(self, fake_run, binaries, manager):
        fake_run.fail(f"{manager.binary} install")
        result = ensure_certbot(_profile(manager))
        assert result.ok is False
        assert len(result.warnings) == 1
        assert "certbot install failed" in result.warnings[0]

    def test_success(self, fake_run, binaries):
        result = ensure_certbot(_profile(PackageManager.DNF))
        assert result.ok is True
        assert fake_run.commands() == ["dnf install -y certbot python3-certbot-nginx"]

    def test_plugin_installed_even_when_certbot_binary_exists(self, fake_run, binaries):
        binaries.add("certbot")
        result = ensure_certbot(_profile(PackageManager.APT))
        assert result.ok is True
        assert fake_run.commands() == [
            "apt-get update -y",
            "apt-get install -y certbot python3-certbot-nginx",
        ]

    def test_yum_enables_epel_first(self, fake_run, binaries):
        ensure_certbot(_profile(PackageManager.YUM, extras=True))
        assert fake_run.commands()[0] == "amazon-linux-extras install epel -y"

    def test_epel_failure_does_not_stop_install(self, fake_run, binaries):
        fake_run.fail("amazon-linux-extras")
        result = ensure_certbot(_profile(PackageManager.YUM, extras=True))
        assert result.ok is True
        assert "yum install -y certbot python3-certbot-nginx" in fake_run.commands()
        assert result.warnings == ["enabling EPEL via amazon-linux-extras failed"]

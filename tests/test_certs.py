"""Tests for certificate provisioning."""

from __future__ import annotations

import pytest

from siteprov.errors import CommandError
from siteprov.services.certs import generate_self_signed, obtain_letsencrypt


class TestSelfSigned:
    def test_openssl_command(self, settings, fake_run):
        generate_self_signed(settings, "203.0.113.7")
        cmd = fake_run.calls[0]
        assert cmd[:4] == ["openssl", "req", "-x509", "-nodes"]
        assert "rsa:2048" in cmd
        assert cmd[cmd.index("-days") + 1] == "365"
        assert cmd[cmd.index("-subj") + 1] == "/CN=203.0.113.7"
        assert cmd[cmd.index("-keyout") + 1] == str(settings.key_path)
        assert cmd[cmd.index("-out") + 1] == str(settings.cert_path)
        assert settings.cert_path.exists()

    def test_rerun_overwrites(self, settings, fake_run):
        generate_self_signed(settings, "a")
        generate_self_signed(settings, "a")
        assert len(fake_run.calls) == 2
        assert settings.key_path.exists()

    def test_openssl_failure_is_fatal(self, settings, fake_run):
        fake_run.fail("openssl")
        with pytest.raises(CommandError):
            generate_self_signed(settings, "a")


class TestLetsEncrypt:
    def test_no_domain_is_silent_skip(self, settings, fake_run, binaries):
        result = obtain_letsencrypt(settings)
        assert result.skipped is True
        assert result.warnings == []
        assert fake_run.calls == []

    def test_domain_without_email_warns(self, make_settings, fake_run, binaries):
        binaries.add("certbot")
        result = obtain_letsencrypt(make_settings(domain="example.com"))
        assert result.ok is False
        assert result.skipped is True
        assert "no EMAIL provided" in result.warnings[0]
        assert fake_run.calls == []

    def test_certbot_missing_warns(self, make_settings, fake_run, binaries):
        result = obtain_letsencrypt(make_settings(domain="example.com", email="a@b.com"))
        assert result.skipped is True
        assert "certbot not installed" in result.warnings[0]

    def test_success(self, make_settings, fake_run, binaries):
        binaries.add("certbot")
        result = obtain_letsencrypt(make_settings(domain="example.com", email="a@b.com"))
        assert result.ok is True
        assert fake_run.commands() == [
            "certbot --nginx -d example.com -m a@b.com --agree-tos --non-interactive --redirect"
        ]

    def test_failure_keeps_self_signed(self, make_settings, fake_run, binaries):
        binaries.add("certbot")
        fake_run.fail("certbot")
        result = obtain_letsencrypt(make_settings(domain="example.com", email="a@b.com"))
        assert result.ok is False
        assert result.skipped is False
        assert "self-signed" in result.warnings[0]

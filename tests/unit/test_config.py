"""
Unit tests for settings loading and the default path policy.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trust_bundle.config import TrustBundleSettings, resolve_certificate_paths
from trust_bundle.domain.models import OsFamily


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TRUST_BUNDLE_CERTIFICATES",
        "TRUST_BUNDLE_LOG_LEVEL",
        "TRUST_BUNDLE_REPORT_TRUST_STORE_ERRORS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestTrustBundleSettings:
    def test_defaults(self) -> None:
        settings = TrustBundleSettings(_env_file=None)
        assert settings.certificates is None
        assert settings.log_level == "INFO"
        assert settings.report_trust_store_errors is False

    def test_certificates_from_env_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUST_BUNDLE_CERTIFICATES", '["/etc/ssl/certs", "/opt/ca.pem"]')
        settings = TrustBundleSettings(_env_file=None)
        assert settings.certificates == ["/etc/ssl/certs", "/opt/ca.pem"]

    def test_explicit_empty_list_is_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUST_BUNDLE_CERTIFICATES", "[]")
        assert TrustBundleSettings(_env_file=None).certificates == []

    def test_log_level_is_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUST_BUNDLE_LOG_LEVEL", " debug ")
        assert TrustBundleSettings(_env_file=None).log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUST_BUNDLE_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            TrustBundleSettings(_env_file=None)

    def test_report_flag_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRUST_BUNDLE_REPORT_TRUST_STORE_ERRORS", "true")
        assert TrustBundleSettings(_env_file=None).report_trust_store_errors is True


class TestResolveCertificatePaths:
    def test_linux_default_when_not_configured(self) -> None:
        assert resolve_certificate_paths(None, OsFamily.LINUX) == [
            "/etc/ssl/certs/ca-certificates",
            "/etc/openssl/certs",
            "/etc/pki/tls/certs",
            "/usr/local/share/certs",
        ]

    @pytest.mark.parametrize("family", [OsFamily.WINDOWS, OsFamily.MAC, OsFamily.OTHER])
    def test_empty_default_elsewhere(self, family: OsFamily) -> None:
        assert resolve_certificate_paths(None, family) == []

    def test_configured_paths_win_over_default(self) -> None:
        assert resolve_certificate_paths(["/opt/ca.pem"], OsFamily.LINUX) == ["/opt/ca.pem"]

    def test_configured_empty_list_disables_default(self) -> None:
        assert resolve_certificate_paths([], OsFamily.LINUX) == []

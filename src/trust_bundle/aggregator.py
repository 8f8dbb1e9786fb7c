"""
Aggregator — the public operation of the package.

    get_trusted_certificates()
      → settings (re-read every call)
      → system certificates (memoized for the process)
      → configured paths, or the platform default
        → expanded certificate files
      → system entries + path entries

The whole operation runs inside call_with_telemetry, which reports the
`trust_bundle.certificates` event with the count from each source. It never
raises: bad settings, missing paths and trust-store failures all degrade the
result instead.

Collaborators are keyword arguments with production defaults, so embedding
applications (and tests) can swap any of them:

    certificates = await get_trusted_certificates(notifier=my_ui_notifier)
    client = create_http_client(certificates)
"""

from __future__ import annotations

from typing import TypeAlias

import asyncio
from collections.abc import Callable

import structlog

from trust_bundle.adapters.filesystem import get_certificates_from_paths
from trust_bundle.adapters.notifications import LogWarningNotifier
from trust_bundle.adapters.platform import detect_os_family
from trust_bundle.adapters.trust_store import get_system_certificates
from trust_bundle.config import (
    SettingsProvider,
    TrustBundleSettings,
    load_settings,
    resolve_certificate_paths,
)
from trust_bundle.domain.models import CertificateEntry, OsFamily, TrustedCertificates
from trust_bundle.domain.ports import TelemetryReporter, WarningNotifier
from trust_bundle.result import ErrorCode, Result
from trust_bundle.telemetry import OperationContext, call_with_telemetry

log = structlog.get_logger()

EVENT_NAME = "trust_bundle.certificates"

SystemCertificateSource: TypeAlias = Callable[[bool], list[CertificateEntry]]


def _load_settings(settings_provider: SettingsProvider) -> TrustBundleSettings | None:
    return (
        Result.from_computation(
            settings_provider,
            ErrorCode.CONFIGURATION_ERROR,
            "Certificate settings could not be loaded",
        )
        .peek_failure(
            lambda failure: log.warning(
                "settings.invalid",
                error_code=failure.code.value,
                error=str(failure.exception),
            )
        )
        .get_or_else(None)
    )


async def _collect(
    context: OperationContext,
    settings_provider: SettingsProvider,
    system_certificates: SystemCertificateSource,
    notifier: WarningNotifier,
    os_family_probe: Callable[[], OsFamily],
) -> TrustedCertificates:
    context.suppress_telemetry = True

    settings = _load_settings(settings_provider)
    report_errors = settings.report_trust_store_errors if settings is not None else False
    configured = settings.certificates if settings is not None else None

    from_system = await asyncio.to_thread(system_certificates, report_errors)

    paths = resolve_certificate_paths(configured, os_family_probe())
    from_paths = await get_certificates_from_paths(paths, notifier)

    context.properties["from_system_count"] = len(from_system)
    context.properties["from_paths_count"] = len(from_paths)

    return TrustedCertificates(from_system=from_system, from_paths=from_paths)


async def collect_trusted_certificates(
    settings_provider: SettingsProvider = load_settings,
    system_certificates: SystemCertificateSource = get_system_certificates,
    notifier: WarningNotifier | None = None,
    reporter: TelemetryReporter | None = None,
    os_family_probe: Callable[[], OsFamily] = detect_os_family,
) -> TrustedCertificates:
    """
    Collect certificates from both sources, keeping them apart by provenance.

    Returns an empty TrustedCertificates if the collection itself blew up.
    """
    notifier = notifier or LogWarningNotifier()
    result = await call_with_telemetry(
        EVENT_NAME,
        lambda context: _collect(
            context,
            settings_provider,
            system_certificates,
            notifier,
            os_family_probe,
        ),
        reporter,
    )
    return result.get_or_else(TrustedCertificates())


async def get_trusted_certificates(
    settings_provider: SettingsProvider = load_settings,
    system_certificates: SystemCertificateSource = get_system_certificates,
    notifier: WarningNotifier | None = None,
    reporter: TelemetryReporter | None = None,
    os_family_probe: Callable[[], OsFamily] = detect_os_family,
) -> list[CertificateEntry]:
    """
    Trusted certificate entries: system certificates first, then configured paths.

    Suitable as the custom CA list of an HTTPS client (see
    adapters.http_client.create_http_client).
    """
    collected = await collect_trusted_certificates(
        settings_provider=settings_provider,
        system_certificates=system_certificates,
        notifier=notifier,
        reporter=reporter,
        os_family_probe=os_family_probe,
    )
    return collected.entries

"""
Trust-store adapter — reads the operating system's trusted CAs.

Platform readers (Windows, macOS) work the only way their integration point
allows: they install what they find into GLOBAL_TRUST.ca, the default trust
configuration shared by every HTTPS client in the process. Left alone, simply
*discovering* system certificates would change how unrelated clients verify
servers. So every read is wrapped in a snapshot/restore:

  1. snapshot GLOBAL_TRUST.ca
  2. run the reader
  3. read back what the reader installed
  4. restore the snapshot (always, including when the reader raised)

The normalized result is memoized for the process lifetime. A lock makes the
read single-flight, so two concurrent first calls cannot interleave their
snapshot/restore windows. reset_system_certificates() forces a recomputation
(tests only).

Reader failures are never fatal: the empty result is cached and never retried.
"""

from __future__ import annotations

import re
import ssl
import subprocess
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager

import structlog

from trust_bundle.adapters.http_client import GLOBAL_TRUST, normalize_ca_value
from trust_bundle.adapters.platform import detect_os_family
from trust_bundle.domain.models import CertificateEntry, OsFamily
from trust_bundle.domain.ports import TrustStoreReader
from trust_bundle.result import ErrorCode, FailureDescription, Result

log = structlog.get_logger()

WINDOWS_STORES: tuple[str, ...] = ("ROOT", "CA")

MAC_KEYCHAINS: tuple[str, ...] = (
    "/System/Library/Keychains/SystemRootCertificates.keychain",
    "/Library/Keychains/System.keychain",
)

_PEM_BLOCK = re.compile(
    r"-----BEGIN CERTIFICATE-----.+?-----END CERTIFICATE-----",
    re.DOTALL,
)


# ─────────────────────── Platform readers ───────────────────────


def _install(certificates: list[CertificateEntry]) -> None:
    """Append certificates to the shared default, as the platform readers do."""
    GLOBAL_TRUST.ca = [*normalize_ca_value(GLOBAL_TRUST.ca), *certificates]


def read_windows_trust_store() -> None:
    """Install the X.509 certificates of the ROOT and CA system stores as PEM."""
    certificates: list[CertificateEntry] = []
    for store in WINDOWS_STORES:
        for cert_bytes, encoding, _trust in ssl.enum_certificates(store):  # type: ignore[attr-defined]
            if encoding == "x509_asn":
                certificates.append(ssl.DER_cert_to_PEM_cert(cert_bytes))
    _install(certificates)


def read_mac_trust_store() -> None:
    """Install the certificates of the system keychains, exported as PEM by `security`."""
    completed = subprocess.run(
        ["security", "find-certificate", "-a", "-p", *MAC_KEYCHAINS],
        capture_output=True,
        text=True,
        check=True,
    )
    _install(_PEM_BLOCK.findall(completed.stdout))


DEFAULT_READERS: Mapping[OsFamily, TrustStoreReader] = {
    OsFamily.WINDOWS: read_windows_trust_store,
    OsFamily.MAC: read_mac_trust_store,
}


# ─────────────────────── Isolation ───────────────────────


@contextmanager
def isolated_global_trust() -> Iterator[None]:
    """
    Restore GLOBAL_TRUST.ca to its value on entry, on every exit path.

    A list value is restored in place as well, so readers that append to the
    prior list object cannot leak entries through another reference to it.
    """
    prior = GLOBAL_TRUST.ca
    previous = list(prior) if isinstance(prior, list) else prior
    try:
        yield
    finally:
        if isinstance(prior, list):
            prior[:] = previous
        GLOBAL_TRUST.ca = prior


def _run_reader(reader: TrustStoreReader) -> list[CertificateEntry]:
    reader()
    return normalize_ca_value(GLOBAL_TRUST.ca)


def read_system_certificates(reader: TrustStoreReader) -> Result[list[CertificateEntry]]:
    """
    Run a platform reader without leaking its side effect.

    Returns whatever the reader installed into GLOBAL_TRUST.ca, normalized
    to a list. GLOBAL_TRUST.ca is left exactly as it was before the call.
    """
    with isolated_global_trust():
        return Result.from_computation(
            lambda: _run_reader(reader),
            ErrorCode.TRUST_STORE_ERROR,
            "System trust store could not be read",
        )


# ─────────────────────── Process-lifetime cache ───────────────────────


class SystemCertificateCache:
    """
    Lazily computed, memoized system certificate set.

    Args:
        os_family_probe: Returns the host OsFamily (probed on first use only).
        readers: Reader per OsFamily; families without one yield [].
        on_error: Optional hook called with the failure when a reader raises.
    """

    def __init__(
        self,
        os_family_probe: Callable[[], OsFamily] = detect_os_family,
        readers: Mapping[OsFamily, TrustStoreReader] | None = None,
        on_error: Callable[[FailureDescription], object] | None = None,
    ) -> None:
        self._os_family_probe = os_family_probe
        self._readers = DEFAULT_READERS if readers is None else readers
        self._on_error = on_error
        self._lock = threading.Lock()
        self._certificates: list[CertificateEntry] | None = None

    def get(self, report_errors: bool = False) -> list[CertificateEntry]:
        """Return the cached system certificates, reading the OS on first call."""
        with self._lock:
            if self._certificates is None:
                self._certificates = self._compute(report_errors)
            return list(self._certificates)

    def reset(self) -> None:
        with self._lock:
            self._certificates = None

    @property
    def is_cached(self) -> bool:
        return self._certificates is not None

    def _compute(self, report_errors: bool) -> list[CertificateEntry]:
        os_family = self._os_family_probe()
        reader = self._readers.get(os_family)
        if reader is None:
            log.debug("system_certificates.no_reader", os_family=os_family.value)
            return []

        certificates = (
            read_system_certificates(reader)
            .peek_failure(lambda failure: self._report_failure(failure, os_family, report_errors))
            .get_or_else([])
        )
        log.debug(
            "system_certificates.loaded",
            os_family=os_family.value,
            count=len(certificates),
        )
        return certificates

    def _report_failure(
        self,
        failure: FailureDescription,
        os_family: OsFamily,
        report_errors: bool,
    ) -> None:
        emit = log.warning if report_errors else log.debug
        emit(
            "system_certificates.read_failed",
            os_family=os_family.value,
            error_code=failure.code.value,
            error=str(failure.exception),
        )
        if self._on_error is not None:
            self._on_error(failure)


_SYSTEM_CERTIFICATES = SystemCertificateCache()


def get_system_certificates(report_errors: bool = False) -> list[CertificateEntry]:
    """Process-wide system certificate set (computed at most once)."""
    return _SYSTEM_CERTIFICATES.get(report_errors)


def reset_system_certificates() -> None:
    """Drop the memoized set so the next call reads the OS again."""
    _SYSTEM_CERTIFICATES.reset()

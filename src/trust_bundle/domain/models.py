"""
Domain models — certificate entries, OS families, and the aggregated result.

Certificate entries are opaque: either raw bytes or a string that is PEM text
(from the OS trust store) or a filesystem path (from configured paths).
Nothing here parses or validates certificate content.
"""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass, field
from enum import Enum, unique

CertificateEntry: TypeAlias = str | bytes

# These are some of the most common paths on Linux, but there is no official standard
LINUX_DEFAULT_CERTIFICATE_PATHS: tuple[str, ...] = (
    "/etc/ssl/certs/ca-certificates",
    "/etc/openssl/certs",
    "/etc/pki/tls/certs",
    "/usr/local/share/certs",
)


@unique
class OsFamily(Enum):
    """
    Host operating system family.

    Closed variant: WINDOWS and MAC have a native trust-store reader,
    LINUX and OTHER do not.
    """

    WINDOWS = "windows"
    MAC = "mac"
    LINUX = "linux"
    OTHER = "other"

    def default_certificate_paths(self) -> list[str]:
        """Paths scanned when no certificate paths are configured."""
        if self is OsFamily.LINUX:
            return list(LINUX_DEFAULT_CERTIFICATE_PATHS)
        return []


@dataclass(frozen=True, slots=True)
class TrustedCertificates:
    """
    Certificates collected by one aggregation call.

    System entries always precede path entries in `entries`.
    """

    from_system: list[CertificateEntry] = field(default_factory=list)
    from_paths: list[str] = field(default_factory=list)

    @property
    def entries(self) -> list[CertificateEntry]:
        return [*self.from_system, *self.from_paths]

    @property
    def from_system_count(self) -> int:
        return len(self.from_system)

    @property
    def from_paths_count(self) -> int:
        return len(self.from_paths)

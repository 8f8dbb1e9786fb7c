"""
HTTP adapter — turns collected certificates into an httpx client configuration.

Also owns GLOBAL_TRUST, the process-wide default trust configuration. Clients
built without explicit entries trust whatever GLOBAL_TRUST.ca holds, so every
client in the process is affected by a change to it. Platform trust-store
readers write into it; the trust_store adapter makes sure those writes never
outlive the read.

Entries are loaded into an ssl.SSLContext one by one:
  - a str naming an existing file → load_verify_locations(cafile=...)
  - any other str (PEM text) or bytes (DER) → load_verify_locations(cadata=...)
Entries that fail to load are skipped; a directory of mixed files (as found
under /etc/ssl/certs) must not break the whole context.
"""

from __future__ import annotations

from typing import TypeAlias

import os
import ssl
from collections.abc import Sequence
from dataclasses import dataclass

import httpx
import structlog

from trust_bundle.domain.models import CertificateEntry
from trust_bundle.result import ErrorCode, Result

log = structlog.get_logger()

CaValue: TypeAlias = CertificateEntry | list[CertificateEntry] | None


@dataclass(slots=True)
class DefaultTrust:
    """Mutable holder for the default CA value shared by all clients."""

    ca: CaValue = None


GLOBAL_TRUST = DefaultTrust()


def normalize_ca_value(value: CaValue) -> list[CertificateEntry]:
    """Absent → [], single entry → [entry], sequence → list as-is."""
    if not value:
        return []
    if isinstance(value, (str, bytes)):
        return [value]
    return list(value)


def _is_file_reference(entry: CertificateEntry) -> bool:
    return (
        isinstance(entry, str)
        and not entry.lstrip().startswith("-----BEGIN")
        and os.path.isfile(entry)
    )


def _load_entry(context: ssl.SSLContext, entry: CertificateEntry) -> CertificateEntry:
    if _is_file_reference(entry):
        context.load_verify_locations(cafile=entry)
    else:
        context.load_verify_locations(cadata=entry)
    return entry


def build_ssl_context(entries: Sequence[CertificateEntry] | None = None) -> ssl.SSLContext:
    """
    Create a client SSL context trusting the given certificate entries.

    With entries=None the current GLOBAL_TRUST.ca value is used instead.
    The platform's default verify paths are always loaded as well.
    """
    if entries is None:
        entries = normalize_ca_value(GLOBAL_TRUST.ca)

    context = ssl.create_default_context()
    loaded = 0
    for index, entry in enumerate(entries):
        result = Result.from_computation(
            lambda entry=entry: _load_entry(context, entry),
            ErrorCode.CERTIFICATE_LOAD_ERROR,
            f"Could not load certificate entry #{index}",
        )
        if result.is_success():
            loaded += 1
        else:
            log.debug(
                "ssl_context.entry_skipped",
                index=index,
                path=entry if _is_file_reference(entry) else None,
                error=str(result.error().exception),
            )

    log.debug("ssl_context.built", entries=len(entries), loaded=loaded)
    return context


def create_http_client(
    entries: Sequence[CertificateEntry] | None = None,
    timeout: int = 60,
) -> httpx.Client:
    """Synchronous httpx client verifying servers against the given entries."""
    return httpx.Client(verify=build_ssl_context(entries), timeout=timeout)


def create_async_http_client(
    entries: Sequence[CertificateEntry] | None = None,
    timeout: int = 60,
) -> httpx.AsyncClient:
    """Async counterpart of create_http_client."""
    return httpx.AsyncClient(verify=build_ssl_context(entries), timeout=timeout)

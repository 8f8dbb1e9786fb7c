"""
Ports — Protocol-based interfaces for the aggregator's collaborators.

The aggregator only knows these contracts; concrete adapters live in
trust_bundle.adapters and are wired by the composition root (main.py) or
replaced by mocks in tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TrustStoreReader(Protocol):
    """
    Port: load the OS trust store into the shared default trust configuration.

    Readers communicate only by side effect: they install what they find into
    GLOBAL_TRUST.ca and return nothing. Callers must isolate that mutation
    (see adapters.trust_store.isolated_global_trust).
    """

    def __call__(self) -> None: ...


@runtime_checkable
class WarningNotifier(Protocol):
    """Port: surface a user-visible warning (e.g. a malformed configured path)."""

    def show_warning(self, message: str) -> None: ...


@runtime_checkable
class TelemetryReporter(Protocol):
    """
    Port: publish a named operation event with its properties.

    `suppressed` events are still reported but are excluded from default
    aggregate reporting.
    """

    def report(
        self,
        event_name: str,
        properties: Mapping[str, Any],
        suppressed: bool,
    ) -> None: ...

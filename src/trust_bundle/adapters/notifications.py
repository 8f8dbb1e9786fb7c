"""User-facing warnings, emitted as structlog warning events."""

from __future__ import annotations

import structlog

log = structlog.get_logger()


class LogWarningNotifier:
    """
    Implements the WarningNotifier port for headless hosts.

    Embedding applications with a UI pass their own notifier instead.
    """

    def show_warning(self, message: str) -> None:
        log.warning("user.warning", message=message)

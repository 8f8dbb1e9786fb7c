"""
Application entry point — collects trusted certificates once and prints them.

Composition root: loads settings, configures structlog, and runs the
aggregator with its production adapters.

Responsibilities:
  1. Load and validate configuration from environment
  2. Configure structlog for console logging
  3. Run get_trusted_certificates()
  4. Print one line per entry (system certificates are summarized)
"""

from __future__ import annotations

import asyncio
import logging
import sys

import structlog

from trust_bundle import __version__
from trust_bundle.aggregator import collect_trusted_certificates
from trust_bundle.config import TrustBundleSettings
from trust_bundle.domain.models import TrustedCertificates


def configure_structlog(log_level: str = "INFO") -> None:
    """Configure structlog for colored, human-readable console output."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def format_certificates(collected: TrustedCertificates) -> list[str]:
    """One printable line per entry, system certificates first."""
    lines = [
        f"<system certificate #{index}>"
        for index in range(1, collected.from_system_count + 1)
    ]
    lines.extend(collected.from_paths)
    return lines


def main() -> None:
    """Collect trusted certificates and print them to stdout."""
    try:
        settings = TrustBundleSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info("app.starting", version=__version__, log_level=settings.log_level)

    collected = asyncio.run(collect_trusted_certificates(settings_provider=lambda: settings))

    log.info(
        "app.certificates_collected",
        from_system_count=collected.from_system_count,
        from_paths_count=collected.from_paths_count,
    )
    for line in format_certificates(collected):
        print(line)  # noqa: T201


if __name__ == "__main__":
    main()

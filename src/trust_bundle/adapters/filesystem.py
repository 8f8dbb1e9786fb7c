"""
Filesystem adapter — expands configured certificate paths into certificate files.

Each configured path is handled independently, in order:
  - not absolute      → user warning, skipped
  - directory         → every file below it (recursive, absolute paths)
  - regular file      → the path itself
  - anything else     → info log, skipped (missing, permission denied, ...)

Blocking calls (exists, stat, walk) run in a worker thread via
asyncio.to_thread so the event loop is never blocked. Nothing is cached:
configuration and the filesystem may change between calls.
"""

from __future__ import annotations

import asyncio
import os
import stat
from collections.abc import Sequence
from enum import Enum, unique

import structlog

from trust_bundle.domain.ports import WarningNotifier
from trust_bundle.result import ErrorCode, Result

log = structlog.get_logger()


@unique
class PathKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    NEITHER = "neither"


def _stat_kind(path: str) -> PathKind:
    if not os.path.exists(path):
        return PathKind.NEITHER
    mode = os.stat(path).st_mode
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    return PathKind.NEITHER


def classify_path(path: str) -> PathKind:
    """Stat a path; any OSError (e.g. permission issues) counts as NEITHER."""
    return (
        Result.from_computation(
            lambda: _stat_kind(path),
            ErrorCode.FILESYSTEM_ERROR,
            f"Could not stat certificate path {path!r}",
        )
        .peek_failure(
            lambda failure: log.debug(
                "certificate_path.stat_failed",
                path=path,
                error=str(failure.exception),
            )
        )
        .get_or_else(PathKind.NEITHER)
    )


def list_files(directory: str) -> list[str]:
    """
    Recursively list the files below `directory` as absolute paths.

    Directories are never returned. Hidden entries (leading dot) are skipped
    and symlinked directories are not followed. Entries are sorted per
    directory level, parents before children.
    """
    files: list[str] = []
    for root, dirnames, filenames in os.walk(
        os.path.abspath(directory),
        onerror=lambda error: log.debug(
            "certificate_path.walk_failed",
            path=error.filename,
            error=str(error),
        ),
    ):
        dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
        files.extend(
            os.path.join(root, name)
            for name in sorted(filenames)
            if not name.startswith(".")
        )
    return files


async def get_certificates_from_paths(
    paths: Sequence[str],
    notifier: WarningNotifier,
) -> list[str]:
    """Expand configured paths into certificate file paths, preserving input order."""
    certificates: list[str] = []
    for cert_path in paths:
        if not os.path.isabs(cert_path):
            notifier.show_warning(
                f'Certificate path "{cert_path}" is not an absolute path, ignored.'
            )
            continue

        kind = await asyncio.to_thread(classify_path, cert_path)
        if kind is PathKind.DIRECTORY:
            certificates.extend(await asyncio.to_thread(list_files, cert_path))
        elif kind is PathKind.FILE:
            certificates.append(cert_path)
        else:
            log.info("certificate_path.not_found", path=cert_path)

    return certificates

"""
Telemetry — wraps an operation to attach uniform diagnostics.

call_with_telemetry() runs an async operation with an OperationContext the
operation can enrich (properties, suppress flag), measures its duration, and
always reports one named event through a TelemetryReporter, whether the
operation succeeded or raised.

Unexpected exceptions become a Failure; they are logged and recorded on the
event, never re-raised. Domain errors are not converted here: operations are
expected to handle their own partial failures.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

import structlog

from trust_bundle.domain.ports import TelemetryReporter
from trust_bundle.result import ErrorCode, Result

T = TypeVar("T")
log = structlog.get_logger()


@dataclass(slots=True)
class OperationContext:
    """Mutable per-call context handed to the wrapped operation."""

    event_name: str
    properties: dict[str, Any] = field(default_factory=dict)
    suppress_telemetry: bool = False


class StructlogTelemetryReporter:
    """
    Implements the TelemetryReporter port as a structlog event.

    Suppressed events are logged at debug level so default (INFO) output
    leaves them out.
    """

    def report(
        self,
        event_name: str,
        properties: Mapping[str, Any],
        suppressed: bool,
    ) -> None:
        emit = log.debug if suppressed else log.info
        emit(
            "telemetry.event",
            name=event_name,
            suppressed=suppressed,
            properties=dict(properties),
        )


async def call_with_telemetry(
    event_name: str,
    operation: Callable[[OperationContext], Awaitable[T]],
    reporter: TelemetryReporter | None = None,
) -> Result[T]:
    """
    Run `operation` and report the `event_name` event afterwards.

    Returns Success(value) or, if the operation raised, Failure(UNKNOWN_ERROR).
    """
    reporter = reporter or StructlogTelemetryReporter()
    context = OperationContext(event_name=event_name)
    start = time.monotonic()

    try:
        value = await operation(context)
    except Exception as e:
        log.error("operation.failed", name=event_name, error=str(e))
        context.properties["result"] = "Failed"
        context.properties["error_code"] = ErrorCode.UNKNOWN_ERROR.value
        context.properties["error_message"] = str(e)
        result: Result[T] = Result.failure(
            ErrorCode.UNKNOWN_ERROR, f"{event_name} failed: {e}", e
        )
    else:
        context.properties.setdefault("result", "Succeeded")
        result = Result.success(value)

    context.properties["duration_seconds"] = round(time.monotonic() - start, 3)
    reporter.report(event_name, context.properties, context.suppress_telemetry)
    return result

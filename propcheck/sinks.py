"""Diagnostic and hard-failure sinks.

Both follow the assertion style: the caller passes the condition that should
hold, a printf-style format string and its arguments. Nothing happens when the
condition holds.
"""

from collections import deque
from typing import Any, Optional, Protocol

import structlog

from propcheck.config import get_settings
from propcheck.errors import InvariantViolation
from propcheck.models import Diagnostic

logger = structlog.get_logger()


def format_message(fmt: str, *args: Any) -> str:
    """Substitute ``%s`` placeholders, tolerating a mismatched argument count."""
    if not args:
        return fmt
    try:
        return fmt % args
    except (TypeError, ValueError):
        return " ".join([fmt, *(str(a) for a in args)])


class DiagnosticSink(Protocol):
    def warning(self, condition: bool, fmt: str, *args: Any, **context: Any) -> None: ...


class InvariantSink(Protocol):
    def invariant(self, condition: bool, fmt: str, *args: Any, **context: Any) -> None: ...


class StructlogDiagnosticSink:
    """Logs diagnostics as structlog warnings and keeps recent ones for inspection.

    Keyword context is matched against the Diagnostic fields (kind, subject,
    field, location, call_site_trace); everything else only goes to the log.
    """

    def __init__(self, max_history: Optional[int] = None):
        self._max_history = max_history or get_settings().DIAGNOSTIC_HISTORY_SIZE
        self._history: deque[Diagnostic] = deque(maxlen=self._max_history)

    def warning(self, condition: bool, fmt: str, *args: Any, **context: Any) -> None:
        if condition:
            return

        message = format_message(fmt, *args)
        logger.warning("type_check_diagnostic", message=message, **context)

        record_fields = {k: v for k, v in context.items() if k in Diagnostic.model_fields}
        self._history.append(Diagnostic(message=message, **record_fields))

    @property
    def history(self) -> list[Diagnostic]:
        return list(self._history)

    def messages(self) -> list[str]:
        return [d.message for d in self._history]

    def clear(self) -> None:
        self._history.clear()


class RaisingInvariantSink:
    """Raises InvariantViolation when an internal-consistency condition fails."""

    def invariant(self, condition: bool, fmt: str, *args: Any, **context: Any) -> None:
        if condition:
            return
        raise InvariantViolation(format_message(fmt, *args), context=context)

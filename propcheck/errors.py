"""Error hierarchy — typed exceptions raised by propcheck collaborators.

Validation failures are never raised to callers of the engine; these types
exist for the hard-failure sink and for anything embedding the engine that
wants to catch them explicitly.
"""

from typing import Any, Optional


class PropCheckError(Exception):
    """Base exception for all propcheck errors."""

    def __init__(self, message: str, code: str = "PROPCHECK_ERROR", context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "context": dict(self.context)}


class InvariantViolation(PropCheckError):
    """Internal-consistency failure, e.g. a type specification that is not callable."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message, code="INVARIANT_VIOLATION", context=context)

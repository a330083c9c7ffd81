"""Type-check models — location kinds, diagnostic kinds, and diagnostic records."""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel


class LocationKind(str, Enum):
    """Semantic category of the values being checked."""

    PROP = "prop"
    CONTEXT = "context"
    CHILD_CONTEXT = "childContext"


# Display names used in diagnostic messages
LOCATION_NAMES = {
    LocationKind.PROP: "prop",
    LocationKind.CONTEXT: "context",
    LocationKind.CHILD_CONTEXT: "child context",
}


def location_display_name(location: Union[LocationKind, str]) -> str:
    """Resolve a location kind (or its raw value) to its display name.

    Strings that are not a known kind are returned unchanged.
    """
    try:
        return LOCATION_NAMES[LocationKind(location)]
    except ValueError:
        return str(location)


class DiagnosticKind(str, Enum):
    """Category of an emitted diagnostic."""

    SPEC_DEFECT = "spec_defect"            # Validator is not callable
    VALIDATOR_MISUSE = "validator_misuse"  # Validator returned a non-exception failure
    TYPE_FAILURE = "type_failure"          # Validator reported a genuine failure
    MISTYPED_FIELD = "mistyped_field"      # Supplied key differs from a declared one by case


class Diagnostic(BaseModel):
    """A single diagnostic emitted through a sink."""

    kind: Optional[DiagnosticKind] = None
    message: str
    subject: Optional[str] = None
    field: Optional[str] = None
    location: Optional[str] = None
    call_site_trace: str = ""

    model_config = {"use_enum_values": True}


class ValidatorOutcome(BaseModel):
    """Result of invoking one validator, raised and returned failures folded together.

    Built with ``from_failure`` so the truth test and message rendering of a
    misbehaving failure value happen once and never raise.
    """

    failure: Any = None
    ok: bool = True
    message: Optional[str] = None

    @classmethod
    def from_failure(cls, failure: Any) -> "ValidatorOutcome":
        if failure is None:
            return cls()
        try:
            ok = not failure
        except Exception:
            # Truth value cannot be tested (e.g. array-like); counts as a failure
            ok = False
        message = failure_message(failure) if isinstance(failure, Exception) else None
        return cls(failure=failure, ok=ok, message=message)

    @property
    def is_error_shaped(self) -> bool:
        return isinstance(self.failure, Exception)

    @property
    def failure_type(self) -> str:
        return type(self.failure).__name__


def failure_message(exc: BaseException) -> str:
    """Render an exception's message, falling back to its type name.

    KeyError quotes its key in ``str()``; its plain string argument is used
    instead, so ``KeyError("size")`` reads ``size``.
    """
    if isinstance(exc, KeyError) and len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    try:
        return str(exc)
    except Exception:
        return type(exc).__name__

"""Call-site references and best-effort trace resolution.

A call site is one of three tagged variants:
    - LegacyIdentifier: numeric id of a completed call site
    - WorkInProgress: descriptor of the unit of work currently being processed
    - DirectReference: the checked subject itself

Traces from a WorkInProgress are only accurate while that descriptor is the
one actively being processed. Outside that window the provider may return a
wrong or empty trace; that is accepted.
"""

from collections.abc import Mapping
from numbers import Real
from typing import Any, Literal, Optional, Protocol, Union

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()

DebugId = Union[int, float]


class LegacyIdentifier(BaseModel):
    kind: Literal["legacy_identifier"] = "legacy_identifier"
    debug_id: DebugId

    model_config = {"frozen": True}


class WorkInProgress(BaseModel):
    kind: Literal["work_in_progress"] = "work_in_progress"
    descriptor: Any

    model_config = {"frozen": True}


class DirectReference(BaseModel):
    kind: Literal["direct_reference"] = "direct_reference"
    subject: Any

    model_config = {"frozen": True}


CallSiteRef = Union[LegacyIdentifier, WorkInProgress, DirectReference]


class CallSiteTraceProvider(Protocol):
    """Produces human-readable descriptions of the active call chain."""

    def stack_by_id(self, debug_id: DebugId) -> str: ...

    def stack_by_work_in_progress(self, descriptor: Any) -> str: ...

    def stack_by_subject(self, subject: Any) -> str: ...


class NullTraceProvider:
    """Trace provider used when no call-site tracking is available."""

    def stack_by_id(self, debug_id: DebugId) -> str:
        return ""

    def stack_by_work_in_progress(self, descriptor: Any) -> str:
        return ""

    def stack_by_subject(self, subject: Any) -> str:
        return ""


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def call_site_from_raw(raw: Any, subject_ref: Any = None) -> Optional[CallSiteRef]:
    """Build a tagged call-site reference from untagged input.

    Args:
        raw: A numeric call-site id, or a work descriptor exposing a numeric
            ``tag`` (attribute or mapping key).
        subject_ref: The checked subject, used when ``raw`` is None.

    Returns:
        The matching variant, or None when nothing usable was supplied.
    """
    if raw is not None:
        if _is_number(raw):
            return LegacyIdentifier(debug_id=raw if isinstance(raw, int) else float(raw))
        try:
            tag = raw.get("tag") if isinstance(raw, Mapping) else getattr(raw, "tag", None)
        except Exception:
            tag = None
        if _is_number(tag):
            return WorkInProgress(descriptor=raw)
        return None
    if subject_ref is not None:
        return DirectReference(subject=subject_ref)
    return None


def resolve_call_site_trace(
    provider: CallSiteTraceProvider,
    call_site: Optional[CallSiteRef],
    enabled: bool = True,
) -> str:
    """Resolve a trace string for a call site; empty when unavailable."""
    if not enabled or call_site is None:
        return ""

    try:
        if isinstance(call_site, LegacyIdentifier):
            trace = provider.stack_by_id(call_site.debug_id)
        elif isinstance(call_site, WorkInProgress):
            trace = provider.stack_by_work_in_progress(call_site.descriptor)
        elif isinstance(call_site, DirectReference):
            trace = provider.stack_by_subject(call_site.subject)
        else:
            return ""
    except Exception as e:
        logger.debug(
            "call_site_trace_failed",
            call_site_kind=getattr(call_site, "kind", None),
            error=str(e),
        )
        return ""

    return trace or ""

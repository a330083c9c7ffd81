"""propcheck — runtime type-spec checking with deduplicated diagnostics.

Usage:
    from propcheck import check_type_spec, LocationKind

    check_type_spec({"size": is_int}, props, LocationKind.PROP, "Button")
"""

from propcheck.call_site import (
    CallSiteRef,
    CallSiteTraceProvider,
    DirectReference,
    LegacyIdentifier,
    NullTraceProvider,
    WorkInProgress,
    call_site_from_raw,
    resolve_call_site_trace,
)
from propcheck.dedup_store import DiagnosticDedupStore, default_dedup_store
from propcheck.engine import TypeSpecEngine, check_type_spec, invoke_validator, type_spec_engine
from propcheck.errors import InvariantViolation, PropCheckError
from propcheck.models import Diagnostic, DiagnosticKind, LocationKind, ValidatorOutcome, location_display_name
from propcheck.sinks import RaisingInvariantSink, StructlogDiagnosticSink

__all__ = [
    "TypeSpecEngine",
    "type_spec_engine",
    "check_type_spec",
    "invoke_validator",
    "DiagnosticDedupStore",
    "default_dedup_store",
    "CallSiteRef",
    "CallSiteTraceProvider",
    "LegacyIdentifier",
    "WorkInProgress",
    "DirectReference",
    "NullTraceProvider",
    "call_site_from_raw",
    "resolve_call_site_trace",
    "StructlogDiagnosticSink",
    "RaisingInvariantSink",
    "Diagnostic",
    "DiagnosticKind",
    "LocationKind",
    "ValidatorOutcome",
    "location_display_name",
    "PropCheckError",
    "InvariantViolation",
]

"""Type-spec engine — runs type specifications against runtime values and reports failures.

This is the main entry point. Validation is advisory: failures are reported
through the diagnostic sink and never raised to the caller.

Usage:
    engine = TypeSpecEngine()
    engine.validate({"size": is_int}, {"size": 5}, LocationKind.PROP, "Button")

Each distinct failure message is reported once per dedup store lifetime,
because the same failure tends to repeat on every call.
"""

import time
from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

import structlog

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
from propcheck.config import get_settings
from propcheck.dedup_store import DiagnosticDedupStore, default_dedup_store
from propcheck.models import DiagnosticKind, LocationKind, ValidatorOutcome, failure_message, location_display_name
from propcheck.sinks import DiagnosticSink, InvariantSink, RaisingInvariantSink, StructlogDiagnosticSink

logger = structlog.get_logger()

Validator = Callable[[Mapping[str, Any], str, Optional[str], Union[LocationKind, str]], Any]

NOT_CALLABLE_FMT = (
    "%s: %s type `%s` is invalid; it must be a callable, usually built by a "
    "type-checker factory."
)
MISUSE_FMT = (
    "%s: type specification of %s `%s` is invalid; the type checker "
    "function must return `None` or an exception but returned a %s. "
    "You may have forgotten to pass an argument to the type checker "
    "creator (array_of, instance_of, object_of, one_of, one_of_type, and "
    "shape all require an argument)."
)
FAILURE_FMT = "Failed %s type: %s%s"
MISTYPED_FMT = "Provided %s `%s` is not defined in the type specification, did you mean `%s`?"


def invoke_validator(
    checker: Validator,
    values: Mapping[str, Any],
    field_name: str,
    subject_name: Optional[str],
    location: Union[LocationKind, str],
) -> ValidatorOutcome:
    """Call a validator, folding a raised exception into the returned failure."""
    try:
        failure = checker(values, field_name, subject_name, location)
    except Exception as e:
        failure = e
    return ValidatorOutcome.from_failure(failure)


class TypeSpecEngine:
    """Checks values against type specifications and emits deduplicated diagnostics.

    Contract:
        - validate() never raises and never returns a value
        - a failure message is reported at most once per dedup store
        - a mistyped field is reported at most once per dedup store
        - misuse warnings and invalid type specs are reported on every call
    """

    def __init__(
        self,
        store: Optional[DiagnosticDedupStore] = None,
        sink: Optional[DiagnosticSink] = None,
        invariant_sink: Optional[InvariantSink] = None,
        trace_provider: Optional[CallSiteTraceProvider] = None,
        diagnostics_enabled: Optional[bool] = None,
        generic_subject_name: Optional[str] = None,
    ):
        """Initialize with default collaborators for anything not supplied.

        Args:
            store: Dedup store. A fresh one is created if None.
            sink: Receives warnings. Defaults to a structlog-backed sink.
            invariant_sink: Raises on specification defects.
            trace_provider: Resolves call-site traces.
            diagnostics_enabled: Resolve call-site traces. Defaults to settings.
            generic_subject_name: Label used when no subject name is given.
        """
        settings = get_settings()
        self.store = store if store is not None else DiagnosticDedupStore()
        self.sink = sink if sink is not None else StructlogDiagnosticSink()
        self.invariant_sink = invariant_sink if invariant_sink is not None else RaisingInvariantSink()
        self.trace_provider = trace_provider if trace_provider is not None else NullTraceProvider()
        self.diagnostics_enabled = (
            settings.DIAGNOSTICS_ENABLED if diagnostics_enabled is None else diagnostics_enabled
        )
        self.generic_subject_name = generic_subject_name or settings.GENERIC_SUBJECT_NAME

    def validate(
        self,
        type_specs: Mapping[str, Any],
        values: Optional[Mapping[str, Any]],
        location: Union[LocationKind, str],
        subject_name: Optional[str] = None,
        call_site: Optional[CallSiteRef] = None,
    ) -> None:
        """Run every type specification against the values.

        Args:
            type_specs: Field name to validator
            values: Runtime values to check; None is treated as empty
            location: What is being checked (prop, context, child context)
            subject_name: Display name of the checked entity
            call_site: Where the check originates, for trace resolution
        """
        start_time = time.perf_counter()
        type_specs = type_specs or {}
        values = values if values is not None else {}

        # Keys supplied but not declared, lower-cased for typo matching
        mismatched = [key for key in values if key not in type_specs]
        lowercase = [str(key).lower() for key in mismatched]

        location_name = location_display_name(location)
        subject_label = subject_name or self.generic_subject_name

        for field_name, checker in type_specs.items():
            self._check_field(
                checker, values, field_name, subject_name, subject_label,
                location, location_name, call_site,
            )
            self._check_mistyped_field(field_name, mismatched, lowercase, subject_label, location_name)

        logger.debug(
            "type_check_complete",
            subject=subject_label,
            location=location_name,
            fields=len(type_specs),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )

    def _check_field(
        self,
        checker: Any,
        values: Mapping[str, Any],
        field_name: str,
        subject_name: Optional[str],
        subject_label: str,
        location: Union[LocationKind, str],
        location_name: str,
        call_site: Optional[CallSiteRef],
    ) -> None:
        context = {"subject": subject_label, "field": field_name, "location": location_name}

        try:
            self.invariant_sink.invariant(
                callable(checker), NOT_CALLABLE_FMT,
                subject_label, location_name, field_name, **context,
            )
        except Exception as e:
            self._emit(False, "%s", failure_message(e), kind=DiagnosticKind.SPEC_DEFECT, **context)
            return
        if not callable(checker):
            return

        outcome = invoke_validator(checker, values, field_name, subject_name, location)

        self._emit(
            outcome.ok or outcome.is_error_shaped, MISUSE_FMT,
            subject_label, location_name, field_name, outcome.failure_type,
            kind=DiagnosticKind.VALIDATOR_MISUSE, **context,
        )

        if outcome.is_error_shaped and self.store.claim_message(outcome.message):
            trace = resolve_call_site_trace(self.trace_provider, call_site, self.diagnostics_enabled)
            self._emit(
                False, FAILURE_FMT, location_name, outcome.message, trace,
                kind=DiagnosticKind.TYPE_FAILURE, call_site_trace=trace, **context,
            )

    def _check_mistyped_field(
        self,
        field_name: str,
        mismatched: list,
        lowercase: list[str],
        subject_label: str,
        location_name: str,
    ) -> None:
        lowered = field_name.lower()
        if lowered not in lowercase or not self.store.claim_typo(field_name):
            return

        mismatch = mismatched[lowercase.index(lowered)]
        self._emit(
            False, MISTYPED_FMT, location_name, mismatch, field_name,
            kind=DiagnosticKind.MISTYPED_FIELD,
            subject=subject_label, field=field_name, location=location_name,
        )

    def _emit(self, condition: bool, fmt: str, *args: Any, **context: Any) -> None:
        try:
            self.sink.warning(condition, fmt, *args, **context)
        except Exception as e:
            # A broken sink must not break the caller
            logger.error(
                "diagnostic_sink_failed",
                error=str(e),
                error_type=type(e).__name__,
                diagnostic_kind=context.get("kind"),
            )


# Module-level singleton, deduplicating for the whole process
type_spec_engine = TypeSpecEngine(store=default_dedup_store)


def check_type_spec(
    type_specs: Mapping[str, Any],
    values: Optional[Mapping[str, Any]],
    location: Union[LocationKind, str],
    subject_name: Optional[str] = None,
    call_site: Any = None,
    subject_ref: Any = None,
) -> None:
    """Validate with the process-wide engine.

    ``call_site`` may be a tagged reference or raw input accepted by
    call_site_from_raw (numeric id or descriptor with an integer ``tag``).
    """
    if not isinstance(call_site, (LegacyIdentifier, WorkInProgress, DirectReference)):
        call_site = call_site_from_raw(call_site, subject_ref)
    type_spec_engine.validate(type_specs, values, location, subject_name, call_site)

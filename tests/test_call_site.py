"""Call-site references — tests for raw coercion and trace resolution.

Tests cover:
    - call_site_from_raw picks the right variant for ids, tagged descriptors, subjects
    - booleans and untagged objects are not mistaken for call sites
    - resolve_call_site_trace dispatches on the variant
    - disabled diagnostics, missing call sites and provider failures yield ""
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from propcheck.call_site import (
    DirectReference,
    LegacyIdentifier,
    NullTraceProvider,
    WorkInProgress,
    call_site_from_raw,
    resolve_call_site_trace,
)


class _NoneTraceProvider:
    def stack_by_id(self, debug_id):
        return None

    def stack_by_work_in_progress(self, descriptor):
        return None

    def stack_by_subject(self, subject):
        return None


# ─── call_site_from_raw ──────────────────────────────────────────

def test_integer_becomes_legacy_identifier():
    assert call_site_from_raw(12) == LegacyIdentifier(debug_id=12)


def test_tagged_object_becomes_work_in_progress():
    fiber = SimpleNamespace(tag=5, name="Button")
    call_site = call_site_from_raw(fiber)
    assert isinstance(call_site, WorkInProgress)
    assert call_site.descriptor is fiber


def test_tagged_mapping_becomes_work_in_progress():
    call_site = call_site_from_raw({"tag": 0})
    assert isinstance(call_site, WorkInProgress)


def test_non_numeric_tag_is_rejected():
    assert call_site_from_raw(SimpleNamespace(tag="host")) is None
    assert call_site_from_raw(SimpleNamespace(tag=True)) is None


def test_float_becomes_legacy_identifier():
    assert call_site_from_raw(3.0) == LegacyIdentifier(debug_id=3.0)


def test_float_tag_becomes_work_in_progress():
    call_site = call_site_from_raw({"tag": 2.0})
    assert isinstance(call_site, WorkInProgress)


def test_tag_lookup_failure_gives_none():
    class _Exploding:
        @property
        def tag(self):
            raise RuntimeError("detached")

    assert call_site_from_raw(_Exploding()) is None


def test_boolean_is_not_a_legacy_identifier():
    assert call_site_from_raw(True) is None


def test_subject_reference_used_without_raw_call_site():
    call_site = call_site_from_raw(None, subject_ref="ButtonElement")
    assert call_site == DirectReference(subject="ButtonElement")


def test_raw_call_site_wins_over_subject_reference():
    assert isinstance(call_site_from_raw(3, subject_ref="ButtonElement"), LegacyIdentifier)


def test_nothing_supplied_gives_none():
    assert call_site_from_raw(None) is None


def test_call_site_variants_are_frozen():
    call_site = LegacyIdentifier(debug_id=1)
    with pytest.raises(ValidationError):
        call_site.debug_id = 2


# ─── resolve_call_site_trace ─────────────────────────────────────

def test_resolve_dispatches_on_variant(trace_provider):
    assert resolve_call_site_trace(trace_provider, LegacyIdentifier(debug_id=4)) == "\n    in Legacy#4"
    assert resolve_call_site_trace(trace_provider, WorkInProgress(descriptor={"tag": 1})) == "\n    in WorkInProgress"
    assert resolve_call_site_trace(trace_provider, DirectReference(subject="Card")) == "\n    in Card"
    assert [kind for kind, _ in trace_provider.calls] == ["id", "work_in_progress", "subject"]


def test_resolve_without_call_site_is_empty(trace_provider):
    assert resolve_call_site_trace(trace_provider, None) == ""
    assert trace_provider.calls == []


def test_resolve_when_disabled_is_empty(trace_provider):
    assert resolve_call_site_trace(trace_provider, LegacyIdentifier(debug_id=4), enabled=False) == ""
    assert trace_provider.calls == []


def test_resolve_normalizes_none_trace():
    assert resolve_call_site_trace(_NoneTraceProvider(), DirectReference(subject="Card")) == ""


def test_null_trace_provider_returns_empty():
    provider = NullTraceProvider()
    assert resolve_call_site_trace(provider, LegacyIdentifier(debug_id=1)) == ""
    assert resolve_call_site_trace(provider, WorkInProgress(descriptor=object())) == ""

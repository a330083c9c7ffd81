"""Root conftest — shared fixtures for engine tests."""

import pytest

from propcheck.config import get_settings
from propcheck.dedup_store import DiagnosticDedupStore
from propcheck.engine import TypeSpecEngine
from propcheck.sinks import StructlogDiagnosticSink


class RecordingTraceProvider:
    """Trace provider that remembers which lookup was used."""

    def __init__(self):
        self.calls: list[tuple[str, object]] = []

    def stack_by_id(self, debug_id):
        self.calls.append(("id", debug_id))
        return f"\n    in Legacy#{debug_id}"

    def stack_by_work_in_progress(self, descriptor):
        self.calls.append(("work_in_progress", descriptor))
        return "\n    in WorkInProgress"

    def stack_by_subject(self, subject):
        self.calls.append(("subject", subject))
        return f"\n    in {subject}"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    # Keep a developer's local environment out of the tests
    for name in ("PROPCHECK_DIAGNOSTICS_ENABLED", "PROPCHECK_GENERIC_SUBJECT_NAME", "PROPCHECK_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sink() -> StructlogDiagnosticSink:
    return StructlogDiagnosticSink(max_history=50)


@pytest.fixture
def store() -> DiagnosticDedupStore:
    return DiagnosticDedupStore()


@pytest.fixture
def trace_provider() -> RecordingTraceProvider:
    return RecordingTraceProvider()


@pytest.fixture
def engine(sink, store, trace_provider) -> TypeSpecEngine:
    return TypeSpecEngine(
        store=store,
        sink=sink,
        trace_provider=trace_provider,
        diagnostics_enabled=True,
    )

"""Diagnostic deduplication store — remembers what has already been reported.

Lifetime is one process or session: both sets only grow. The set of distinct
failure messages and field names a codebase can produce is finite, so memory
stays bounded in practice.
"""

import threading


class DiagnosticDedupStore:
    """Thread-safe record of reported failure messages and mistyped fields."""

    def __init__(self):
        self._lock = threading.Lock()
        self._messages: set[str] = set()
        self._typo_fields: set[str] = set()

    # ── Failure messages ──

    def has_reported_message(self, message: str) -> bool:
        with self._lock:
            return message in self._messages

    def mark_reported(self, message: str) -> None:
        with self._lock:
            self._messages.add(message)

    def claim_message(self, message: str) -> bool:
        """Mark a message reported; True only for the first caller to claim it."""
        with self._lock:
            if message in self._messages:
                return False
            self._messages.add(message)
            return True

    # ── Mistyped fields ──

    def has_reported_typo(self, field_name: str) -> bool:
        with self._lock:
            return field_name in self._typo_fields

    def mark_typo_reported(self, field_name: str) -> None:
        with self._lock:
            self._typo_fields.add(field_name)

    def claim_typo(self, field_name: str) -> bool:
        """Mark a field's typo reported; True only for the first caller to claim it."""
        with self._lock:
            if field_name in self._typo_fields:
                return False
            self._typo_fields.add(field_name)
            return True

    @property
    def reported_message_count(self) -> int:
        return len(self._messages)

    @property
    def reported_typo_count(self) -> int:
        return len(self._typo_fields)


# Module-level singleton
default_dedup_store = DiagnosticDedupStore()

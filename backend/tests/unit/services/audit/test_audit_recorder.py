"""
Unit tests for the best-effort audit recorder.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from privacywatch.models import AccessLevel, AuditEvent, AuditFailed, AuditRecorded, RequestContext
from privacywatch.repositories import InMemoryAuditStore
from privacywatch.services.audit import ACCESS_DENIED_MESSAGE, RATE_LIMIT_MESSAGE, AuditRecorder


class UnavailableAuditStore(InMemoryAuditStore):
    def append(self, record):
        raise ConnectionError("audit database unavailable")


@pytest.mark.unit
class TestAuditRecorder:
    def test_records_event_with_context(self, recorder, audit_store, user_context, fixed_clock) -> None:
        outcome = recorder.record(
            AuditEvent(action="submit", resource_type="task", resource_id="t-1", new_state={"status": "in_review"}),
            user_context,
        )

        assert isinstance(outcome, AuditRecorded)
        assert outcome.ok
        assert len(audit_store) == 1
        record = audit_store.query_actor("org-user-1")[0]
        assert record.ip_address == "10.0.0.1"
        assert record.user_agent == "pytest"
        assert record.created_at == fixed_clock()
        assert record.new_state == {"status": "in_review"}

    def test_store_failure_is_swallowed(self, user_context, caplog) -> None:
        recorder = AuditRecorder(UnavailableAuditStore())

        with caplog.at_level(logging.ERROR, logger="privacywatch.audit"):
            outcome = recorder.record_action(user_context, "create", "document", "d-1")

        assert isinstance(outcome, AuditFailed)
        assert not outcome.ok
        assert "audit database unavailable" in outcome.reason
        assert outcome.record is not None
        assert any("Audit store append failed" in message for message in caplog.messages)

    def test_access_denied_helper(self, recorder, audit_store, user_context) -> None:
        recorder.record_access_denied(user_context, "read", "task", "t-9")
        record = audit_store.query_actor("org-user-1")[0]

        assert not record.success
        assert record.error_message == ACCESS_DENIED_MESSAGE
        assert record.access_level == AccessLevel.DENIED

    def test_rate_limited_helper(self, recorder, audit_store, user_context) -> None:
        recorder.record_rate_limited(user_context, "upload_document", "document")
        record = audit_store.query_actor("org-user-1")[0]

        assert not record.success
        assert record.error_message == RATE_LIMIT_MESSAGE
        assert record.details == {"operation": "upload_document"}

    def test_returned_record_cannot_alter_stored_record(self, recorder, audit_store, user_context) -> None:
        outcome = recorder.record_action(user_context, "submit", "task", "t-1", details={"a": "original"})
        outcome.record.details["a"] = "changed"

        assert audit_store.query_actor("org-user-1")[0].details == {"a": "original"}


@pytest.mark.unit
class TestConcurrentRecording:
    def test_parallel_writers_keep_every_record_intact(self, recorder, audit_store) -> None:
        def write(index):
            context = RequestContext(actor_id=f"user-{index % 5}", ip_address=f"10.0.0.{index}")
            return recorder.record_action(
                context, "create", "document", f"d-{index}", details={"index": index}
            )

        with ThreadPoolExecutor(max_workers=10) as pool:
            outcomes = list(pool.map(write, range(100)))

        assert all(o.ok for o in outcomes)
        assert len(audit_store) == 100

        records = [r for actor in range(5) for r in audit_store.query_actor(f"user-{actor}")]
        assert sorted(r.details["index"] for r in records) == list(range(100))
        for record in records:
            index = record.details["index"]
            assert record.resource_id == f"d-{index}"
            assert record.ip_address == f"10.0.0.{index}"
            assert record.actor_id == f"user-{index % 5}"

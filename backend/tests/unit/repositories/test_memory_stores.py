"""
Unit tests for the in-memory store implementations.
"""

import pytest

from privacywatch.exceptions import TaskNotFoundError
from privacywatch.models import AnswerSet, AuditRecord, OrganizationProfile, RemediationTask, TaskPriority, TaskStatus


def _task(org: str = "org-1", key: str = "consent") -> RemediationTask:
    return RemediationTask(
        organization_id=org,
        template_key=key,
        title=key,
        category="consent",
        priority=TaskPriority.HIGH,
    )


@pytest.mark.unit
class TestInMemoryTaskStore:
    def test_returned_tasks_are_copies(self, task_store) -> None:
        created = task_store.create_task(_task())
        created.status = TaskStatus.COMPLETED
        assert task_store.get_task(created.id).status == TaskStatus.PENDING

    def test_list_by_organization(self, task_store) -> None:
        task_store.create_task(_task("org-1", "a"))
        task_store.create_task(_task("org-2", "b"))
        assert [t.template_key for t in task_store.list_tasks("org-1")] == ["a"]

    def test_update_unknown_task(self, task_store) -> None:
        with pytest.raises(TaskNotFoundError):
            task_store.update_task(_task())

    def test_delete_all(self, task_store) -> None:
        task_store.create_task(_task("org-1", "a"))
        task_store.create_task(_task("org-1", "b"))
        task_store.create_task(_task("org-2", "c"))
        assert task_store.delete_all_tasks("org-1") == 2
        assert task_store.list_tasks("org-1") == []
        assert len(task_store.list_tasks("org-2")) == 1

    def test_cancel_only_open_tasks(self, task_store) -> None:
        open_task = task_store.create_task(_task(key="a"))
        done = _task(key="b")
        done.status = TaskStatus.COMPLETED
        task_store.create_task(done)

        assert task_store.cancel_all_tasks("org-1") == 1
        assert task_store.get_task(open_task.id).status == TaskStatus.CANCELLED
        assert task_store.get_task(done.id).status == TaskStatus.COMPLETED


@pytest.mark.unit
class TestInMemoryAnswerStore:
    def test_versions_assigned_by_store(self, answer_store) -> None:
        first = answer_store.save_answers(AnswerSet(organization_id="org-1", answers=[]))
        second = answer_store.save_answers(AnswerSet(organization_id="org-1", answers=[]))
        other = answer_store.save_answers(AnswerSet(organization_id="org-2", answers=[]))

        assert (first.version, second.version, other.version) == (1, 2, 1)
        assert answer_store.get_latest_answers("org-1").version == 2

    def test_missing_organization(self, answer_store) -> None:
        assert answer_store.get_latest_answers("nobody") is None


@pytest.mark.unit
class TestInMemoryProfileStore:
    def test_round_trip(self, profile_store) -> None:
        profile_store.save_profile(OrganizationProfile(organization_id="org-1", sectors=["Marketing"]))
        assert profile_store.get_profile("org-1").sectors == ["Marketing"]
        assert profile_store.get_profile("org-2") is None


@pytest.mark.unit
class TestInMemoryAuditStore:
    def test_records_are_copied_in_and_out(self, audit_store) -> None:
        record = AuditRecord(actor_id="u1", action="read", resource_type="task", details={"a": "original"})
        audit_store.append(record)
        record.details["a"] = "changed"

        loaded = audit_store.query_actor("u1")[0]
        loaded.details["a"] = "changed again"

        assert audit_store.query_actor("u1")[0].details == {"a": "original"}
        assert audit_store.query_range(record.created_at, record.created_at)[0].details == {"a": "original"}

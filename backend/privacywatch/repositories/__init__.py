"""
Repository Pattern Implementation for PrivacyWatch

Store interfaces plus in-memory and SQL implementations.

Usage:
    from privacywatch.repositories import InMemoryTaskStore, TaskStore

    store: TaskStore = InMemoryTaskStore()
    tasks = store.list_tasks(organization_id)
"""

from .base import AnswerStore, AuditStore, ProfileStore, TaskStore
from .memory import (
    InMemoryAnswerStore,
    InMemoryAuditStore,
    InMemoryProfileStore,
    InMemoryTaskStore,
)
from .sql_audit_store import SqlAuditStore

__all__ = [
    "AnswerStore",
    "AuditStore",
    "ProfileStore",
    "TaskStore",
    "InMemoryAnswerStore",
    "InMemoryAuditStore",
    "InMemoryProfileStore",
    "InMemoryTaskStore",
    "SqlAuditStore",
]

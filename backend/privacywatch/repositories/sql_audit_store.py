"""
SQL Audit Store
Writes audit records to the audit_log table with plain text() statements
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, DateTime, Engine, bindparam, create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from ..models import AuditRecord
from .base import AuditStore

logger = logging.getLogger(__name__)

AUDIT_LOG_DDL = """
    CREATE TABLE IF NOT EXISTS audit_log (
        id VARCHAR(36) PRIMARY KEY,
        actor_id VARCHAR(255),
        action VARCHAR(100) NOT NULL,
        resource_type VARCHAR(100) NOT NULL,
        resource_id VARCHAR(255),
        details TEXT,
        previous_state TEXT,
        new_state TEXT,
        ip_address VARCHAR(45),
        user_agent TEXT,
        success BOOLEAN NOT NULL,
        error_message TEXT,
        access_level VARCHAR(20),
        created_at TIMESTAMP NOT NULL
    )
"""

AUDIT_LOG_COLUMNS = """
    id, actor_id, action, resource_type, resource_id, details,
    previous_state, new_state, ip_address, user_agent, success,
    error_message, access_level, created_at
"""


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _dump_json(value: Optional[Dict[str, Any]]) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, default=str, ensure_ascii=False)


def _load_json(value: Optional[str]) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    return json.loads(value)


class SqlAuditStore(AuditStore):
    """
    Audit store backed by any SQLAlchemy-supported database.

    One INSERT per record; records are never updated or deleted.

    Example:
        store = SqlAuditStore.from_url("sqlite:///./audit.db")
        store.create_schema()
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlAuditStore":
        return cls(create_engine(database_url, pool_pre_ping=True))

    def create_schema(self) -> None:
        """Create the audit_log table if it does not exist"""
        with self.session_factory() as db:
            db.execute(text(AUDIT_LOG_DDL))
            db.execute(text("CREATE INDEX IF NOT EXISTS idx_audit_log_created_at ON audit_log (created_at)"))
            db.execute(text("CREATE INDEX IF NOT EXISTS idx_audit_log_actor_id ON audit_log (actor_id)"))
            db.commit()
        logger.info("Audit log schema ready")

    def append(self, record: AuditRecord) -> None:
        query = text(
            f"""
            INSERT INTO audit_log ({AUDIT_LOG_COLUMNS})
            VALUES (
                :id, :actor_id, :action, :resource_type, :resource_id, :details,
                :previous_state, :new_state, :ip_address, :user_agent, :success,
                :error_message, :access_level, :created_at
            )
        """
        ).bindparams(bindparam("created_at", type_=DateTime()), bindparam("success", type_=Boolean()))

        params = {
            "id": record.id,
            "actor_id": record.actor_id,
            "action": record.action,
            "resource_type": record.resource_type,
            "resource_id": record.resource_id,
            "details": _dump_json(record.details),
            "previous_state": _dump_json(record.previous_state),
            "new_state": _dump_json(record.new_state),
            "ip_address": record.ip_address,
            "user_agent": record.user_agent,
            "success": record.success,
            "error_message": record.error_message,
            "access_level": record.access_level.value if record.access_level else None,
            "created_at": _to_naive_utc(record.created_at),
        }

        with self.session_factory() as db:
            try:
                db.execute(query, params)
                db.commit()
            except Exception:
                db.rollback()
                raise

    def query_range(self, start: datetime, end: datetime) -> List[AuditRecord]:
        query = text(
            f"""
            SELECT {AUDIT_LOG_COLUMNS}
            FROM audit_log
            WHERE created_at >= :start AND created_at <= :end
            ORDER BY created_at
        """
        ).bindparams(bindparam("start", type_=DateTime()), bindparam("end", type_=DateTime()))

        return self._fetch(query, {"start": _to_naive_utc(start), "end": _to_naive_utc(end)})

    def query_actor(
        self, actor_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[AuditRecord]:
        conditions = ["actor_id = :actor_id"]
        params: Dict[str, Any] = {"actor_id": actor_id}
        bind_types = []

        if start is not None:
            conditions.append("created_at >= :start")
            params["start"] = _to_naive_utc(start)
            bind_types.append(bindparam("start", type_=DateTime()))
        if end is not None:
            conditions.append("created_at <= :end")
            params["end"] = _to_naive_utc(end)
            bind_types.append(bindparam("end", type_=DateTime()))

        query = text(
            f"""
            SELECT {AUDIT_LOG_COLUMNS}
            FROM audit_log
            WHERE {" AND ".join(conditions)}
            ORDER BY created_at
        """
        )
        if bind_types:
            query = query.bindparams(*bind_types)

        return self._fetch(query, params)

    def _fetch(self, query, params: Dict[str, Any]) -> List[AuditRecord]:
        typed = query.columns(created_at=DateTime(), success=Boolean())
        with self.session_factory() as db:
            rows = db.execute(typed, params).mappings().all()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row) -> AuditRecord:
        created_at = row["created_at"]
        if isinstance(created_at, datetime) and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return AuditRecord(
            id=row["id"],
            actor_id=row["actor_id"],
            action=row["action"],
            resource_type=row["resource_type"],
            resource_id=row["resource_id"],
            details=_load_json(row["details"]) or {},
            previous_state=_load_json(row["previous_state"]),
            new_state=_load_json(row["new_state"]),
            ip_address=row["ip_address"] or "unknown",
            user_agent=row["user_agent"] or "unknown",
            success=bool(row["success"]),
            error_message=row["error_message"],
            access_level=row["access_level"],
            created_at=created_at,
        )

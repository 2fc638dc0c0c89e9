"""Audit log domain service."""

from typing import Optional

from valecashback.database.base import Database
from valecashback.domain.entities import AuditLogEntry
from valecashback.domain.errors import ValidationError


class AuditService:
    """Read access to the audit trail of rate and commission changes."""

    def __init__(self, db: Database):
        self.db = db

    def list_entries(self, limit: Optional[int] = None) -> list[AuditLogEntry]:
        """List audit entries, newest first.

        Args:
            limit: Maximum number of entries to return; all when None

        Raises:
            ValidationError: If ``limit`` is not a positive number
        """
        if limit is not None and limit < 1:
            raise ValidationError(f"Limit must be at least 1, got {limit}")
        return self.db.list_audit_logs(limit=limit)

"""Shared behaviour mixed into the domain models.

Activity state, timestamps and blame tracking are declared once here and
composed into each model. ``AuditMixin.audit`` reads the audit columns back
as a single immutable value.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from database import db


@dataclass(frozen=True)
class AuditTrail:
    """Snapshot of who touched a row and when."""

    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    created_by: Optional[str]
    updated_by: Optional[str]


class ActiveMixin:
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def activate(self):
        self.is_active = True
        return self

    def deactivate(self):
        self.is_active = False
        return self


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class BlameMixin:
    created_by = db.Column(db.String(80), nullable=True)
    updated_by = db.Column(db.String(80), nullable=True)

    def stamp_blame(self, user) -> None:
        """Record ``user`` as the last editor, and as the creator on first save."""

        username = getattr(user, "username", None) if user is not None else None
        if username is None:
            return
        if self.created_by is None:
            self.created_by = username
        self.updated_by = username


class AuditMixin(TimestampMixin, BlameMixin):
    @property
    def audit(self) -> AuditTrail:
        return AuditTrail(
            created_at=self.created_at,
            updated_at=self.updated_at,
            created_by=self.created_by,
            updated_by=self.updated_by,
        )

"""Inspection visits recorded by engineers and reviewed by administrators."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from site_inspector.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, str_enum


class VisitStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class VisitPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class VisitType(str, Enum):
    ROUTINE = "Routine"
    EMERGENCY = "Emergency"
    MAINTENANCE = "Maintenance"
    INSPECTION = "Inspection"


# Statuses that close a visit; notes are frozen once reached.
CLOSED_STATUSES = frozenset({VisitStatus.ACCEPTED, VisitStatus.REJECTED, VisitStatus.CANCELLED})


class Visit(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A visit by one engineer (``user_id``) to one site (``site_id``).

    Relations are plain foreign keys; callers load related rows explicitly
    through their repositories.
    """

    __tablename__ = "visits"

    site_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sites.id", ondelete="RESTRICT"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    status: Mapped[VisitStatus] = mapped_column(
        str_enum(VisitStatus), nullable=False, default=VisitStatus.PENDING
    )
    priority: Mapped[VisitPriority] = mapped_column(
        str_enum(VisitPriority), nullable=False, default=VisitPriority.MEDIUM
    )
    type: Mapped[VisitType] = mapped_column(
        str_enum(VisitType), nullable=False, default=VisitType.ROUTINE
    )
    scheduled_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index("ix_visits_user_id_site_id", "user_id", "site_id"),
        Index("ix_visits_status", "status"),
    )

"""Physical sites visited by engineers."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from site_inspector.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, str_enum


class SiteStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    MAINTENANCE = "Maintenance"
    DECOMMISSIONED = "Decommissioned"


class Site(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A physical installation identified by a unique site ``code``.

    Sites carry no owner; engineers gain access to a site through the visits
    they record there.
    """

    __tablename__ = "sites"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[SiteStatus] = mapped_column(
        str_enum(SiteStatus), nullable=False, default=SiteStatus.ACTIVE
    )

    __table_args__ = (UniqueConstraint("code", name="uq_sites_code"),)

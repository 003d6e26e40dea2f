"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from site_inspector.repositories.base import BaseRepository
from site_inspector.repositories.password_reset import PasswordResetTokenRepository
from site_inspector.repositories.refresh_token import RefreshTokenRepository
from site_inspector.repositories.site import SiteRepository
from site_inspector.repositories.user import UserRepository
from site_inspector.repositories.visit import VisitRepository

__all__ = [
    # Base
    "BaseRepository",
    # Domain
    "PasswordResetTokenRepository",
    "RefreshTokenRepository",
    "SiteRepository",
    "UserRepository",
    "VisitRepository",
]

"""
Abstract Unit of Work contracts.

Services type against these contracts; the SQLAlchemy implementation lives in
:mod:`site_inspector.uow.sqlalchemy_uow`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from site_inspector.repositories import (
        PasswordResetTokenRepository,
        RefreshTokenRepository,
        SiteRepository,
        UserRepository,
        VisitRepository,
    )


class UnitOfWork(ABC):
    """
    Transactional boundary for one use case.

    Every repository attribute shares the same session, so a token rotation
    (revoke old row, insert new row) or a password change (update hash,
    revoke sessions) either lands completely or not at all.

    Repository attributes
    ---------------------
    users, refresh_tokens, password_resets, sites, visits
    """

    users: UserRepository
    refresh_tokens: RefreshTokenRepository
    password_resets: PasswordResetTokenRepository
    sites: SiteRepository
    visits: VisitRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...

"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`site_inspector.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``site_inspector.services._shared``)
    * :class:`BaseService`, :class:`ServiceContext`
    * :class:`ServiceResult`, :class:`ErrorKind`, :class:`ClientInfo`

- Token lifecycle (from ``site_inspector.services.tokens``)
    * :class:`TokenService`, :class:`TokenConfig`, :class:`TokenPairOut`

- Authentication (from ``site_inspector.services.auth``)
    * :class:`AuthService` and its DTOs

- Authorization (from ``site_inspector.services.authorization``)
    * :class:`AuthorizationService`, :func:`decide`, :class:`Caller`,
      :class:`AccessCheck`, :class:`Decision`

- Resources (from ``site_inspector.services.visits`` / ``.sites``)
    * :class:`VisitService`, :class:`SiteService`

- Accounts (from ``site_inspector.services.users``)
    * :class:`UserAdminService`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from ._shared.dto import ClientInfo
from ._shared.errors import ErrorKind
from ._shared.results import ServiceResult
from .auth import (
    AuthOut,
    AuthService,
    ChangePasswordIn,
    LoginIn,
    RegisterIn,
    ResetPasswordIn,
    UserPublicOut,
)
from .authorization import (
    AccessCheck,
    AuthorizationService,
    Caller,
    Decision,
    ManagementAction,
    decide,
)
from .sites import SiteOut, SiteService
from .tokens import RefreshSessionOut, TokenConfig, TokenPairOut, TokenService
from .users import UpdateUserStatusIn, UserAdminService, UserStatusOut
from .visits import ChangeStatusIn, VisitOut, VisitService

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    "ServiceResult",
    "ErrorKind",
    "ClientInfo",
    # Tokens
    "TokenService",
    "TokenConfig",
    "TokenPairOut",
    "RefreshSessionOut",
    # Auth
    "AuthService",
    "AuthOut",
    "RegisterIn",
    "LoginIn",
    "ChangePasswordIn",
    "ResetPasswordIn",
    "UserPublicOut",
    # Authorization
    "AuthorizationService",
    "AccessCheck",
    "Caller",
    "Decision",
    "ManagementAction",
    "decide",
    # Resources
    "VisitService",
    "ChangeStatusIn",
    "VisitOut",
    "SiteService",
    "SiteOut",
    # Accounts
    "UserAdminService",
    "UpdateUserStatusIn",
    "UserStatusOut",
]

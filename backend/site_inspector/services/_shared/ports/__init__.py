"""
site_inspector.services._shared.ports
=====================================

Collection of *ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider` — abstraction for signed access tokens.

- :mod:`notifier`:
    Defines :class:`~.PasswordResetNotifier` — delivery of password-reset secrets.

Concrete adapters live under ``site_inspector.infra``.
"""

from __future__ import annotations

from .notifier import InMemoryPasswordResetNotifier, PasswordResetNotifier, SentReset
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "StubTokenProvider",
    "PasswordResetNotifier",
    "InMemoryPasswordResetNotifier",
    "SentReset",
]

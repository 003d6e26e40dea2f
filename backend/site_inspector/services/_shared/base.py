# site_inspector/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from site_inspector.services._shared.errors import ServiceError, StoreUnavailableError
from site_inspector.services._shared.results import ServiceResult
from site_inspector.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

T = TypeVar("T")

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Convert domain errors raised inside an operation into a failed
      :class:`ServiceResult` (:meth:`run`).
    * Wrap store outages into :class:`StoreUnavailableError`, which is left to
      propagate to the top-level handler.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Services never import Flask; request data arrives as DTOs.
    """

    # ---- Configuration defaults (override per subclass if needed) ----
    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # -------------------------- Clock ---------------------------------------

    @staticmethod
    def now_utc() -> datetime:
        """Return the current instant as an aware UTC datetime."""
        return datetime.now(UTC)

    # -------------------------- Error handling ------------------------------

    def run(self, fn: Callable[[], T], *, message: str) -> ServiceResult[T]:
        """
        Execute ``fn`` and wrap its outcome in a :class:`ServiceResult`.

        :param fn: Zero-argument callable implementing the operation.
        :type fn: Callable[[], T]
        :param message: Success message placed in the envelope.
        :type message: str
        :returns: ``ok`` with the return value, or ``fail`` for a
            :class:`ServiceError`.
        :rtype: ServiceResult[T]
        :raises StoreUnavailableError: When the relational store fails.
        """
        try:
            return ServiceResult.ok(fn(), message)
        except StoreUnavailableError:
            raise
        except ServiceError as exc:
            log.info(
                "%s failed: %s",
                type(self).__name__,
                exc.kind.value,
                extra={"event": "service.failure", "reason": exc.kind.value},
            )
            return ServiceResult.from_error(exc)
        except IntegrityError:
            raise
        except (OperationalError, DBAPIError) as exc:
            raise StoreUnavailableError() from exc

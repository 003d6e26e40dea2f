"""Uniform result envelope returned by every public service operation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from typing import Any, Generic, TypeVar

from site_inspector.services._shared.errors import ErrorKind, ServiceError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a service call.

    :param success: ``True`` when the operation completed.
    :type success: bool
    :param message: Human-readable summary, safe to show to clients.
    :type message: str
    :param data: Payload on success, ``None`` on failure.
    :type data: T | None
    :param errors: Detail strings on failure, empty on success.
    :type errors: tuple[str, ...]
    :param kind: Failure category, ``None`` on success.
    :type kind: ErrorKind | None
    """

    success: bool
    message: str
    data: T | None = None
    errors: tuple[str, ...] = ()
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str = "") -> ServiceResult[T]:
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        message: str,
        errors: list[str] | tuple[str, ...] | None = None,
    ) -> ServiceResult[T]:
        return cls(
            success=False,
            message=message,
            errors=tuple(errors) if errors else (message,),
            kind=kind,
        )

    @classmethod
    def from_error(cls, exc: ServiceError) -> ServiceResult[T]:
        return cls.fail(exc.kind, exc.message, exc.errors)

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> dict[str, Any]:
        """Return the wire envelope ``{success, message, data, errors}``."""
        data: Any = self.data
        if is_dataclass(data) and not isinstance(data, type):
            data = asdict(data)
        elif isinstance(data, list):
            data = [asdict(d) if is_dataclass(d) and not isinstance(d, type) else d for d in data]
        return {
            "success": self.success,
            "message": self.message,
            "data": data,
            "errors": list(self.errors),
        }

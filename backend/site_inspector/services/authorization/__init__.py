from .policy import (
    AccessCheck,
    AccessLookup,
    Caller,
    CheckKind,
    Decision,
    DenyReason,
    ManagementAction,
    decide,
)
from .service import AuthorizationService, RepositoryAccessLookup

__all__ = [
    "AccessCheck",
    "AccessLookup",
    "AuthorizationService",
    "Caller",
    "CheckKind",
    "Decision",
    "DenyReason",
    "ManagementAction",
    "RepositoryAccessLookup",
    "decide",
]

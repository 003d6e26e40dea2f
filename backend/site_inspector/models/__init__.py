from site_inspector.models.password_reset import PasswordResetToken
from site_inspector.models.refresh_token import RefreshToken, RevocationReason
from site_inspector.models.site import Site, SiteStatus
from site_inspector.models.user import User, UserRole
from site_inspector.models.visit import Visit, VisitPriority, VisitStatus, VisitType

__all__ = [
    "PasswordResetToken",
    "RefreshToken",
    "RevocationReason",
    "Site",
    "SiteStatus",
    "User",
    "UserRole",
    "Visit",
    "VisitPriority",
    "VisitStatus",
    "VisitType",
]

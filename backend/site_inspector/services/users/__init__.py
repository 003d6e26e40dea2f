from .dto import UpdateUserStatusIn, UserStatusOut
from .service import UserAdminService

__all__ = ["UserAdminService", "UpdateUserStatusIn", "UserStatusOut"]

from collections.abc import Iterable

from site_inspector.models.user import UserRole

ADMIN_ONLY = frozenset({UserRole.ADMIN})


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    if actor_id is None or owner_id is None:
        return False
    return str(actor_id) == str(owner_id)


def has_any_role(role, allowed: Iterable[UserRole]) -> bool:
    """Return True if ``role`` (enum or its string value) is in ``allowed``."""
    if role is None:
        return False
    try:
        role = UserRole(role)
    except ValueError:
        return False
    return role in allowed

from django.conf import settings

from src.core.exceptions import PermissionDeniedError


def ensure_staff(user) -> None:
    if not getattr(user, "is_staff", False):
        raise PermissionDeniedError("Only platform administrators can access this")


def ensure_registry_admin(user) -> None:
    """
    Adding institutes is reserved to the registry owner. Staff accounts pass,
    and when REGISTRY_ADMIN_USERNAMES is set the caller must be listed.
    """
    ensure_staff(user)
    allowed = getattr(settings, "REGISTRY_ADMIN_USERNAMES", [])
    if allowed and user.get_username() not in allowed:
        raise PermissionDeniedError("Only admin can add institutes.")

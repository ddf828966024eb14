from core.errors import NotAuthenticated, PermissionDenied
from models.enums import Permission
from models.user import Session


# -----------------------------------------------------
# Permission evaluation
#   • deny by default
#   • no role-based implicit grants (an Admin holds only
#     what its own permission set lists)
# -----------------------------------------------------
def has_capability(session: Session, capability: Permission) -> bool:
    if session is None:
        return False
    return capability in session.permissions


def require_capability(session: Session, capability: Permission, action: str = None) -> None:
    """Raise PermissionDenied unless `capability` is held by `session`."""
    if session is None:
        raise NotAuthenticated()
    if not has_capability(session, capability):
        raise PermissionDenied(capability.value, action)

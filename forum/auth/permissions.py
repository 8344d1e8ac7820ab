# forum/auth/permissions.py
import enum

from forum.users.models import User, UserRole


class AccessDecision(enum.Enum):
    ALLOW = "allow"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


# niveles de acceso usados por los routers
ANY_ROLE: frozenset[str] = frozenset()
STAFF_ROLES: frozenset[str] = frozenset({UserRole.ADMIN.value, UserRole.MODERATOR.value})
ADMIN_ROLES: frozenset[str] = frozenset({UserRole.ADMIN.value})


def check_access(principal: User | None, required_roles: frozenset[str]) -> AccessDecision:
    """
    Única comprobación de permisos del foro.

    - sin usuario → UNAUTHENTICATED
    - conjunto vacío → basta con estar autenticado
    - si no, el rol del usuario tiene que estar en el conjunto
    """
    if principal is None:
        return AccessDecision.UNAUTHENTICATED
    if not required_roles or principal.role in required_roles:
        return AccessDecision.ALLOW
    return AccessDecision.FORBIDDEN

import enum
from typing import Iterable


class Role(str, enum.Enum):
    admin = "admin"
    leader = "leader"
    helper = "helper"
    public = "public"


# Admin and leader are interchangeable on every administrative surface.
STAFF_ROLES = frozenset({Role.admin, Role.leader})

# Helper dashboard and self-service volunteering.
HELPER_ROLES = frozenset({Role.helper, Role.leader})


def coerce_role(role: "Role | str | None") -> Role | None:
    if role is None or isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def role_set(roles: Iterable["Role | str"] | None) -> frozenset[Role]:
    if not roles:
        return frozenset()
    return frozenset(Role(role) for role in roles)


def is_staff(role: Role | str | None) -> bool:
    return coerce_role(role) in STAFF_ROLES


def can_use_helper_dashboard(role: Role | str | None) -> bool:
    return coerce_role(role) in HELPER_ROLES

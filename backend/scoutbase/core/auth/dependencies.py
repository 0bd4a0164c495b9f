from typing import Annotated, Iterable, Optional

from fastapi import Depends, status

from scoutbase.config import settings
from scoutbase.core.auth.guard import GuardDecision, evaluate_access
from scoutbase.core.auth.roles import HELPER_ROLES, STAFF_ROLES, Role
from scoutbase.core.auth.session import AuthState
from scoutbase.core.portal import ClientDep
from scoutbase.response import CustomHTTPException


def check_user_type(allowed_roles: Iterable[Role | str] | None = None, optional=False):
    """
    Creates a dependency that applies the access guard to a page view.

    Args:
        allowed_roles: roles admitted to the page; empty or None admits
            any signed-in user
        optional: let anonymous viewers through with ``None`` instead of
            redirecting them to the login page

    Returns:
        Dependency function returning the viewer's ``AuthState``
    """
    allowed_roles = list(allowed_roles or [])

    async def role_checker(client: ClientDep) -> Optional[AuthState]:
        session = client.session
        if optional and not session.is_authenticated():
            return None

        decision = evaluate_access(
            session.is_authenticated(),
            session.role(),
            allowed_roles,
            pending=session.pending,
        )
        if decision == GuardDecision.loading:
            raise CustomHTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                message="Checking your session",
                error_code="SESSION_PENDING",
                headers={"Retry-After": "1"},
            )
        if decision == GuardDecision.redirect_login:
            raise CustomHTTPException(
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
                message="Please log in to continue",
                error_code="LOGIN_REQUIRED",
                headers={"Location": settings.LOGIN_PATH},
            )
        if decision == GuardDecision.redirect_home:
            raise CustomHTTPException(
                status_code=status.HTTP_307_TEMPORARY_REDIRECT,
                message="Not Authorized",
                error_code="INSUFFICIENT_PERMISSIONS",
                headers={"Location": settings.HOME_PATH},
            )
        return session.state()

    return role_checker


DependsAuth = Annotated[AuthState, Depends(check_user_type())]
StaffAuth = Annotated[AuthState, Depends(check_user_type(STAFF_ROLES))]
HelperAuth = Annotated[AuthState, Depends(check_user_type(HELPER_ROLES))]

OptionalAuth = Annotated[Optional[AuthState], Depends(check_user_type(optional=True))]

import enum
import logging
from typing import Iterable

from scoutbase.core.auth.roles import Role, coerce_role, role_set

logger = logging.getLogger(__name__)


class GuardDecision(enum.Enum):
    loading = "loading"
    redirect_login = "redirect_login"
    redirect_home = "redirect_home"
    render = "render"


def evaluate_access(
    is_authenticated: bool,
    user_role: Role | str | None,
    allowed_roles: Iterable[Role | str] | None = None,
    pending: bool = False,
) -> GuardDecision:
    """
    Decide what a guarded page does for the current session.

    Args:
        is_authenticated: whether a valid, unexpired session exists
        user_role: role of the signed-in user, if any
        allowed_roles: roles admitted to the page; empty admits any
            authenticated role
        pending: a "who am I" check is still outstanding

    Returns:
        GuardDecision for the page
    """
    if pending:
        return GuardDecision.loading

    if not is_authenticated:
        logger.debug("Guard: user is not authenticated, redirecting to login")
        return GuardDecision.redirect_login

    allowed = role_set(allowed_roles)
    if allowed and coerce_role(user_role) not in allowed:
        logger.debug(f"Guard: role {user_role!r} not allowed, redirecting to home")
        return GuardDecision.redirect_home

    return GuardDecision.render

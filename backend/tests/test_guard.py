import pytest

from scoutbase.core.auth.guard import GuardDecision, evaluate_access
from scoutbase.core.auth.roles import (
    HELPER_ROLES,
    STAFF_ROLES,
    Role,
    can_use_helper_dashboard,
    is_staff,
    role_set,
)


def test_pending_check_never_redirects():
    assert evaluate_access(False, None, STAFF_ROLES, pending=True) == GuardDecision.loading
    assert evaluate_access(True, "public", STAFF_ROLES, pending=True) == GuardDecision.loading


@pytest.mark.parametrize("allowed", [None, [], STAFF_ROLES, ["helper"]])
def test_anonymous_viewer_is_sent_to_login(allowed):
    assert evaluate_access(False, None, allowed) == GuardDecision.redirect_login


def test_role_outside_allowed_set_is_sent_home():
    assert evaluate_access(True, "helper", STAFF_ROLES) == GuardDecision.redirect_home
    assert evaluate_access(True, "public", HELPER_ROLES) == GuardDecision.redirect_home


def test_allowed_role_renders():
    assert evaluate_access(True, "leader", STAFF_ROLES) == GuardDecision.render
    assert evaluate_access(True, Role.admin, ["admin", "leader"]) == GuardDecision.render
    assert evaluate_access(True, "leader", HELPER_ROLES) == GuardDecision.render


def test_empty_allowed_set_admits_any_signed_in_role():
    assert evaluate_access(True, "public", []) == GuardDecision.render
    assert evaluate_access(True, None, None) == GuardDecision.render


def test_unknown_role_is_not_admitted():
    assert evaluate_access(True, "superuser", STAFF_ROLES) == GuardDecision.redirect_home


def test_role_set_rejects_unknown_roles():
    with pytest.raises(ValueError):
        role_set(["leader", "wizard"])


def test_admin_and_leader_are_staff():
    assert is_staff("admin")
    assert is_staff(Role.leader)
    assert not is_staff("helper")
    assert not is_staff(None)


def test_helper_dashboard_roles():
    assert can_use_helper_dashboard("helper")
    assert can_use_helper_dashboard("leader")
    assert not can_use_helper_dashboard("admin")
    assert not can_use_helper_dashboard("public")

import pytest

from scoutbase.api.users import service
from scoutbase.api.users.schemas import UserFilters, UserPublic
from scoutbase.core.actions import always_confirm, never_confirm
from scoutbase.core.auth.roles import Role

USERS = [
    UserPublic(id=1, username="akela", email="akela@pack.org", first_name="Anna", last_name="Grey", role=Role.leader),
    UserPublic(id=2, username="mowgli", email="m@pack.org", first_name="Tom", last_name="Wolf", role=Role.public),
    UserPublic(id=3, username="baloo", email="baloo@pack.org", first_name="Ben", last_name="Bear", role=Role.helper),
]


def names(users):
    return [user.username for user in users]


def test_search_matches_username_email_and_full_name():
    assert names(service.filter_users(USERS, UserFilters(search="AKELA"))) == ["akela"]
    assert names(service.filter_users(USERS, UserFilters(search="m@pack"))) == ["mowgli"]
    assert names(service.filter_users(USERS, UserFilters(search="ben bear"))) == ["baloo"]


def test_search_and_role_filter_intersect():
    filters = UserFilters(search="pack.org", role=Role.helper)
    assert names(service.filter_users(USERS, filters)) == ["baloo"]
    assert names(service.filter_users(USERS, UserFilters())) == ["akela", "mowgli", "baloo"]


@pytest.mark.asyncio
async def test_change_role_sends_user_and_role(portal, client_for):
    portal.add("PUT", "/admin/users/role", {"success": True})

    await service.change_role(client_for("admin"), 2, Role.helper)

    assert portal.body(portal.calls("PUT", "/admin/users/role")[0]) == {"userId": 2, "role": "helper"}


@pytest.mark.asyncio
async def test_delete_user_requires_confirmation(portal, client_for):
    portal.add("DELETE", "/admin/users/2", {"success": True})
    client = client_for("admin")

    assert await service.delete_user(client, 2, never_confirm) is False
    assert portal.requests == []
    assert await service.delete_user(client, 2, always_confirm) is True

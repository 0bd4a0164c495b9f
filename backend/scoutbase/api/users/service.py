import logging

from scoutbase.api.users.schemas import UserFilters, UserPublic, UserRoleUpdate
from scoutbase.core.actions import Confirm, ask, perform
from scoutbase.core.auth.roles import Role
from scoutbase.core.client import ApiClient

logger = logging.getLogger(__name__)

DELETE_USER_PROMPT = "Are you sure you want to delete this user?"


async def list_users(client: ApiClient) -> list[UserPublic]:
    data = await perform("fetching users", client.get("/admin/users"), "Failed to load users")
    return [UserPublic.model_validate(user) for user in data.get("users") or []]


def filter_users(users: list[UserPublic], filters: UserFilters) -> list[UserPublic]:
    """Search text and role filter both apply."""
    term = filters.search.strip().lower()

    def matches_search(user: UserPublic) -> bool:
        if not term:
            return True
        full_name = f"{user.first_name or ''} {user.last_name or ''}".lower()
        return (
            term in user.username.lower()
            or term in user.email.lower()
            or term in full_name
        )

    return [
        user
        for user in users
        if matches_search(user) and (filters.role is None or user.role == filters.role)
    ]


async def change_role(client: ApiClient, user_id: int, role: Role) -> None:
    update = UserRoleUpdate(user_id=user_id, role=role)
    await perform(
        "updating user role",
        client.put("/admin/users/role", json=update.model_dump(by_alias=True, mode="json")),
        "Failed to update user role",
    )
    logger.info(f"Role of user {user_id} changed to {role.value}")


async def delete_user(client: ApiClient, user_id: int, confirm: Confirm) -> bool:
    if not await ask(confirm, DELETE_USER_PROMPT):
        return False
    await perform(
        "deleting user",
        client.delete(f"/admin/users/{user_id}"),
        "Failed to delete user. Please try again later.",
    )
    logger.info(f"User {user_id} deleted")
    return True

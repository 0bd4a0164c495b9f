from typing import List, Optional

from fastapi import APIRouter

from scoutbase.api.users import service
from scoutbase.api.users.schemas import UserFilters, UserPublic, UserRoleUpdate
from scoutbase.core.actions import require_confirmation
from scoutbase.core.auth.dependencies import StaffAuth
from scoutbase.core.auth.roles import Role
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/users")


@router.get("", summary="Members, searched and filtered by role")
async def list_users(
    client: ClientDep,
    user: StaffAuth,
    search: str = "",
    role: Optional[Role] = None,
) -> List[UserPublic]:
    users = await service.list_users(client)
    return service.filter_users(users, UserFilters(search=search, role=role))


@router.put("/role", summary="Change a member's role")
async def change_role(
    client: ClientDep, user: StaffAuth, update: UserRoleUpdate
) -> List[UserPublic]:
    await service.change_role(client, update.user_id, update.role)
    return await service.list_users(client)


@router.delete("/{user_id}", summary="Delete a member")
async def delete_user(
    client: ClientDep, user: StaffAuth, user_id: int, confirmed: bool = False
) -> List[UserPublic]:
    await service.delete_user(client, user_id, require_confirmation(confirmed))
    return await service.list_users(client)

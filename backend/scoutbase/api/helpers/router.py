from typing import Optional

from fastapi import APIRouter

from scoutbase.api.helpers import service
from scoutbase.api.helpers.schemas import (
    HelperDashboard,
    HelperProfile,
    HelperRegistration,
)
from scoutbase.core.auth.dependencies import DependsAuth, HelperAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/helpers")


@router.get("/dashboard", summary="Events the helper has volunteered for")
async def get_dashboard(client: ClientDep, user: HelperAuth) -> HelperDashboard:
    return await service.load_dashboard(client)


@router.get("/profile", summary="Helper profile of the signed-in user")
async def get_profile(client: ClientDep, user: DependsAuth) -> Optional[HelperProfile]:
    return await service.get_profile(client)


@router.post("/register", summary="Register as a helper")
async def register_helper(
    client: ClientDep, user: DependsAuth, registration: HelperRegistration
) -> HelperProfile:
    return await service.register_helper(client, registration)

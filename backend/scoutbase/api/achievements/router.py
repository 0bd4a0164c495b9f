from typing import Annotated

from fastapi import APIRouter, Depends

from scoutbase.api.achievements.schemas import (
    AchievementStatistics,
    AwardForm,
    AwardRequest,
    UserAchievements,
)
from scoutbase.api.achievements.service import BadgeRecords, get_badge_records
from scoutbase.core.actions import require_confirmation
from scoutbase.core.auth.dependencies import DependsAuth, StaffAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/achievements")

BadgeRecordsDep = Annotated[BadgeRecords, Depends(get_badge_records)]


@router.get("/award-form", summary="Members and badges for the award form")
async def get_award_form(
    client: ClientDep, user: StaffAuth, records: BadgeRecordsDep
) -> AwardForm:
    return await records.ledger(client).award_form()


@router.post("", summary="Award a badge")
async def award_badge(
    client: ClientDep, user: StaffAuth, records: BadgeRecordsDep, request: AwardRequest
) -> UserAchievements:
    ledger = records.ledger(client)
    user_id = await ledger.award(request)
    return await records.user_badges(ledger, user_id)


@router.get("/statistics", summary="Badge achievement statistics")
async def get_statistics(
    client: ClientDep, user: StaffAuth, records: BadgeRecordsDep
) -> AchievementStatistics:
    return await records.ledger(client).statistics()


@router.delete("/{user_id}/{badge_id}", summary="Revoke a badge")
async def revoke_badge(
    client: ClientDep,
    user: StaffAuth,
    records: BadgeRecordsDep,
    user_id: int,
    badge_id: int,
    confirmed: bool = False,
) -> UserAchievements:
    ledger = records.ledger(client)
    await ledger.revoke(user_id, badge_id, require_confirmation(confirmed))
    return await records.user_badges(ledger, user_id)


@router.get("/user/{user_id}", summary="Badges a member has earned")
async def get_user_badges(
    client: ClientDep, user: DependsAuth, records: BadgeRecordsDep, user_id: int
) -> UserAchievements:
    return await records.user_badges(records.ledger(client), user_id)

from typing import List

from fastapi import APIRouter

from scoutbase.api.announcements import service
from scoutbase.api.announcements.schemas import (
    ALL_CATEGORIES,
    AnnouncementCreate,
    AnnouncementPublic,
    AnnouncementUpdate,
)
from scoutbase.core.actions import require_confirmation
from scoutbase.core.auth.dependencies import StaffAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/announcements")


@router.get("", summary="Notice board for the viewer")
async def get_board(
    client: ClientDep, category: str = ALL_CATEGORIES
) -> List[AnnouncementPublic]:
    return await service.load_board(client, category)


@router.post("", summary="Pin a new note to the board")
async def create_announcement(
    client: ClientDep, user: StaffAuth, announcement: AnnouncementCreate
) -> List[AnnouncementPublic]:
    return await service.create_announcement(client, announcement)


@router.put("/{announcement_id}", summary="Edit a note")
async def update_announcement(
    client: ClientDep,
    user: StaffAuth,
    announcement_id: int,
    announcement: AnnouncementUpdate,
) -> List[AnnouncementPublic]:
    return await service.update_announcement(client, announcement_id, announcement)


@router.delete("/{announcement_id}", summary="Remove a note from the board")
async def delete_announcement(
    client: ClientDep, user: StaffAuth, announcement_id: int, confirmed: bool = False
) -> List[AnnouncementPublic]:
    return await service.delete_announcement(
        client, announcement_id, require_confirmation(confirmed)
    )

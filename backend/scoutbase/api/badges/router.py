from typing import List, Optional

from fastapi import APIRouter, File, Form, UploadFile

from scoutbase.api.badges import service
from scoutbase.api.badges.schemas import BadgeCatalog, BadgeFilters, BadgePublic
from scoutbase.core.actions import require_confirmation
from scoutbase.core.auth.dependencies import StaffAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/badges")


async def _read_image(image: UploadFile | None) -> service.BadgeImage | None:
    if image is None or not image.filename:
        return None
    return (image.filename, await image.read(), image.content_type or "application/octet-stream")


@router.get("", summary="Badge catalog, searched and filtered by category")
async def list_badges(
    client: ClientDep, search: str = "", category: Optional[str] = None
) -> BadgeCatalog:
    return await service.load_catalog(
        client, BadgeFilters(search=search, category=category)
    )


@router.get("/categories", summary="Badge categories")
async def list_categories(client: ClientDep) -> List[str]:
    return await service.list_categories(client)


@router.get("/search", summary="Search badges on the portal")
async def search_badges(client: ClientDep, q: str = "") -> List[BadgePublic]:
    return await service.search_badges(client, q)


@router.get("/{badge_id}", summary="Badge details")
async def get_badge(client: ClientDep, badge_id: int) -> BadgePublic:
    return await service.get_badge(client, badge_id)


@router.post("", summary="Create a badge")
async def create_badge(
    client: ClientDep,
    user: StaffAuth,
    name: str = Form(""),
    category: str = Form(""),
    description: str = Form(""),
    difficulty_level: int = Form(1, alias="difficultyLevel"),
    requirements: List[str] = Form([]),
    activities: List[str] = Form([]),
    image: UploadFile | None = File(None),
) -> BadgeCatalog:
    await service.create_badge(
        client,
        {
            "name": name,
            "category": category,
            "description": description,
            "difficulty_level": difficulty_level,
            "requirements": requirements,
            "activities": activities,
        },
        await _read_image(image),
    )
    return await service.load_catalog(client)


@router.put("/{badge_id}", summary="Update a badge")
async def update_badge(
    client: ClientDep,
    user: StaffAuth,
    badge_id: int,
    name: str = Form(""),
    category: str = Form(""),
    description: str = Form(""),
    difficulty_level: int = Form(1, alias="difficultyLevel"),
    requirements: List[str] = Form([]),
    activities: List[str] = Form([]),
    image: UploadFile | None = File(None),
) -> BadgeCatalog:
    await service.update_badge(
        client,
        badge_id,
        {
            "name": name,
            "category": category,
            "description": description,
            "difficulty_level": difficulty_level,
            "requirements": requirements,
            "activities": activities,
        },
        await _read_image(image),
    )
    return await service.load_catalog(client)


@router.delete("/{badge_id}", summary="Delete a badge")
async def delete_badge(
    client: ClientDep, user: StaffAuth, badge_id: int, confirmed: bool = False
) -> BadgeCatalog:
    await service.delete_badge(client, badge_id, require_confirmation(confirmed))
    return await service.load_catalog(client)

import logging

from pydantic import ValidationError

from scoutbase.api.announcements.schemas import (
    ALL_CATEGORIES,
    AnnouncementCreate,
    AnnouncementPublic,
    AnnouncementUpdate,
    TargetRoles,
)
from scoutbase.core.actions import Confirm, ask, perform
from scoutbase.core.auth.roles import Role, coerce_role, is_staff
from scoutbase.core.client import ApiClient
from scoutbase.response import ActionError, PreconditionError

logger = logging.getLogger(__name__)

DELETE_ANNOUNCEMENT_PROMPT = "Are you sure you want to remove this note from the board?"
LOAD_FALLBACK = "Failed to load announcements. Please try again later."
SAVE_FALLBACK = "Failed to save announcement. Please try again later."


def is_visible(announcement: AnnouncementPublic, role: Role | str | None) -> bool:
    """Anonymous viewers only see notes addressed to everyone."""
    if announcement.target_role == TargetRoles.all:
        return True
    role = coerce_role(role)
    return role is not None and announcement.target_role.value == role.value


def filter_by_category(
    announcements: list[AnnouncementPublic], category: str | None
) -> list[AnnouncementPublic]:
    if not category or category == ALL_CATEGORIES:
        return list(announcements)
    return [a for a in announcements if a.category == category]


def sort_announcements(announcements: list[AnnouncementPublic]) -> list[AnnouncementPublic]:
    # sorted() is stable, so ties keep the order the portal sent them in
    return sorted(
        announcements,
        key=lambda a: (not a.is_pinned, -a.created_at.timestamp()),
    )


def compose_board(
    announcements: list[AnnouncementPublic],
    role: Role | str | None,
    category: str | None = ALL_CATEGORIES,
) -> list[AnnouncementPublic]:
    visible = [a for a in announcements if is_visible(a, role)]
    return sort_announcements(filter_by_category(visible, category))


async def list_announcements(
    client: ApiClient, include_inactive: bool = False
) -> list[AnnouncementPublic]:
    """
    Announcements from the portal.

    ``include_inactive`` uses the staff listing, which also returns
    deactivated notes; it is ignored for non-staff sessions.
    """
    endpoint = "/announcements"
    if include_inactive and is_staff(client.session.role()):
        endpoint = "/announcements/admin/all"
    data = await perform("fetching announcements", client.get(endpoint), LOAD_FALLBACK)
    if data.get("success") is False:
        raise ActionError(LOAD_FALLBACK)
    return [
        AnnouncementPublic.model_validate(item)
        for item in data.get("announcements") or []
    ]


async def load_board(
    client: ApiClient, category: str | None = ALL_CATEGORIES
) -> list[AnnouncementPublic]:
    role = client.session.role()
    announcements = await list_announcements(client, include_inactive=is_staff(role))
    return compose_board(announcements, role, category)


def _validate(model, data):
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        raise PreconditionError("Title and content are required", errors=errors)


def _require_staff(client: ApiClient) -> None:
    if not is_staff(client.session.role()):
        raise PreconditionError("Only leaders can manage announcements")


async def create_announcement(
    client: ApiClient, data: AnnouncementCreate | dict
) -> list[AnnouncementPublic]:
    _require_staff(client)
    announcement = _validate(AnnouncementCreate, data)
    await perform(
        "creating announcement",
        client.post(
            "/announcements",
            json=announcement.model_dump(mode="json", by_alias=True),
        ),
        SAVE_FALLBACK,
    )
    logger.info(f"Announcement '{announcement.title}' created")
    return await load_board(client)


async def update_announcement(
    client: ApiClient, announcement_id: int, data: AnnouncementUpdate | dict
) -> list[AnnouncementPublic]:
    _require_staff(client)
    announcement = _validate(AnnouncementUpdate, data)
    await perform(
        "updating announcement",
        client.put(
            f"/announcements/{announcement_id}",
            json=announcement.model_dump(mode="json", by_alias=True),
        ),
        SAVE_FALLBACK,
    )
    logger.info(f"Announcement {announcement_id} updated")
    return await load_board(client)


async def delete_announcement(
    client: ApiClient, announcement_id: int, confirm: Confirm
) -> list[AnnouncementPublic] | None:
    _require_staff(client)
    if not await ask(confirm, DELETE_ANNOUNCEMENT_PROMPT):
        return None
    await perform(
        "deleting announcement",
        client.delete(f"/announcements/{announcement_id}"),
        "Failed to remove the announcement. Please try again later.",
    )
    logger.info(f"Announcement {announcement_id} removed")
    return await load_board(client)

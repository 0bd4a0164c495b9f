import asyncio
import json
import logging

from pydantic import ValidationError

from scoutbase.api.badges.schemas import (
    BadgeCatalog,
    BadgeFilters,
    BadgeForm,
    BadgePublic,
)
from scoutbase.core.actions import Confirm, ask, perform
from scoutbase.core.auth.roles import is_staff
from scoutbase.core.client import ApiClient
from scoutbase.response import ActionError, PreconditionError

logger = logging.getLogger(__name__)

DELETE_BADGE_PROMPT = "Are you sure you want to delete this badge?"

# (filename, content, content type), as httpx takes a multipart file
BadgeImage = tuple[str, bytes, str]


async def list_badges(client: ApiClient) -> list[BadgePublic]:
    data = await perform(
        "fetching badges",
        client.get("/badges"),
        "Failed to load badges. Please try again later.",
    )
    return [BadgePublic.model_validate(badge) for badge in data.get("badges") or []]


async def get_badge(client: ApiClient, badge_id: int) -> BadgePublic:
    data = await perform(
        "fetching badge",
        client.get(f"/badges/{badge_id}"),
        "Failed to load badge",
    )
    if not data.get("badge"):
        raise ActionError("Badge not found", status_code=404)
    return BadgePublic.model_validate(data["badge"])


async def list_categories(client: ApiClient) -> list[str]:
    data = await perform(
        "fetching badge categories",
        client.get("/badges/categories"),
        "Failed to load badge categories",
    )
    return [category for category in data.get("categories") or [] if category]


async def search_badges(client: ApiClient, query: str) -> list[BadgePublic]:
    """Portal-side search over name, description and category."""
    query = query.strip()
    if not query:
        raise PreconditionError("Search query is required")
    data = await perform(
        "searching badges",
        client.get("/badges/search", params={"q": query}),
        "Failed to search badges. Please try again later.",
    )
    return [BadgePublic.model_validate(badge) for badge in data.get("badges") or []]


def filter_badges(badges: list[BadgePublic], filters: BadgeFilters) -> list[BadgePublic]:
    term = filters.search.strip().lower()

    def matches(badge: BadgePublic) -> bool:
        text = f"{badge.name}\n{badge.description or ''}".lower()
        if term and term not in text:
            return False
        return not filters.category or badge.category == filters.category

    return [badge for badge in badges if matches(badge)]


async def load_catalog(client: ApiClient, filters: BadgeFilters | None = None) -> BadgeCatalog:
    badges, categories = await asyncio.gather(
        list_badges(client), list_categories(client)
    )
    return BadgeCatalog(
        badges=filter_badges(badges, filters or BadgeFilters()),
        categories=categories,
    )


def _require_staff(client: ApiClient) -> None:
    if not is_staff(client.session.role()):
        raise PreconditionError("Only leaders can manage badges")


def _validate(data: BadgeForm | dict) -> BadgeForm:
    if isinstance(data, BadgeForm):
        return data
    try:
        return BadgeForm.model_validate(data)
    except ValidationError as exc:
        errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        raise PreconditionError("Badge name and category are required", errors=errors)


def _form_fields(form: BadgeForm) -> dict:
    # the portal parses the lists out of JSON strings in the form body
    return {
        "name": form.name,
        "category": form.category,
        "description": form.description,
        "difficultyLevel": str(form.difficulty_level),
        "requirements": json.dumps(form.requirements),
        "activities": json.dumps(form.activities),
    }


def _files(image: BadgeImage | None) -> dict | None:
    return {"image": image} if image else None


def _saved_badge(response: dict) -> BadgePublic:
    if not response.get("badge"):
        raise ActionError("Error saving badge")
    return BadgePublic.model_validate(response["badge"])


async def create_badge(
    client: ApiClient, data: BadgeForm | dict, image: BadgeImage | None = None
) -> BadgePublic:
    _require_staff(client)
    form = _validate(data)
    response = await perform(
        "creating badge",
        client.post("/badges", data=_form_fields(form), files=_files(image)),
        "Error saving badge",
    )
    logger.info(f"Badge '{form.name}' created")
    return _saved_badge(response)


async def update_badge(
    client: ApiClient,
    badge_id: int,
    data: BadgeForm | dict,
    image: BadgeImage | None = None,
) -> BadgePublic:
    """Without a new image the portal keeps the current one."""
    _require_staff(client)
    form = _validate(data)
    response = await perform(
        "updating badge",
        client.put(f"/badges/{badge_id}", data=_form_fields(form), files=_files(image)),
        "Error saving badge",
    )
    logger.info(f"Badge {badge_id} updated")
    return _saved_badge(response)


async def delete_badge(client: ApiClient, badge_id: int, confirm: Confirm) -> bool:
    _require_staff(client)
    if not await ask(confirm, DELETE_BADGE_PROMPT):
        return False
    await perform(
        "deleting badge",
        client.delete(f"/badges/{badge_id}"),
        "Failed to delete badge",
    )
    logger.info(f"Badge {badge_id} deleted")
    return True

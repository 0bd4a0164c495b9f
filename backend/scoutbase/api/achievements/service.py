import asyncio
import logging
import time

from scoutbase.api.achievements.schemas import (
    AchievementPublic,
    AchievementStatistics,
    AwardForm,
    AwardRequest,
    UserAchievements,
)
from scoutbase.api.badges.service import list_badges
from scoutbase.api.users.schemas import UserPublic
from scoutbase.api.users.service import list_users
from scoutbase.config import settings
from scoutbase.core.actions import Confirm, ask, perform
from scoutbase.core.auth.roles import is_staff
from scoutbase.core.client import ApiClient
from scoutbase.core.fetching import RefreshCounter
from scoutbase.response import PreconditionError

logger = logging.getLogger(__name__)

REVOKE_BADGE_PROMPT = "Are you sure you want to revoke this badge?"
NO_ELIGIBLE_USERS = "No eligible users found (excluding admins and leaders)."
STAFF_NOT_ELIGIBLE = "Badges cannot be awarded to admins or leaders"


def coerce_id(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def eligible_users(users: list[UserPublic]) -> list[UserPublic]:
    """Members a badge can be awarded to: never staff, and only with a usable id."""
    candidates = [user for user in users if not is_staff(user.role)]
    valid = [user for user in candidates if coerce_id(user.id) is not None]
    if len(valid) != len(candidates):
        logger.warning(
            f"Skipped {len(candidates) - len(valid)} users with invalid ids"
        )
    return valid


class BadgeLedger:
    """
    Awards and revokes badges.

    Every successful award or revoke bumps ``refresh``; achievement lists
    compare the value they were loaded at and re-fetch when it moved.
    """

    def __init__(self, client: ApiClient, refresh: RefreshCounter | None = None):
        self.client = client
        self.refresh = refresh or RefreshCounter()

    async def award_form(self) -> AwardForm:
        users, badges = await asyncio.gather(
            list_users(self.client), list_badges(self.client)
        )
        eligible = eligible_users(users)
        return AwardForm(
            users=eligible,
            badges=badges,
            message=None if eligible else NO_ELIGIBLE_USERS,
        )

    async def _require_eligible(self, user_id: int) -> None:
        users = await list_users(self.client)
        selected = next((user for user in users if coerce_id(user.id) == user_id), None)
        if selected is None:
            raise PreconditionError("User not found")
        if is_staff(selected.role):
            logger.warning(f"Refused to award a badge to staff member {user_id}")
            raise PreconditionError(STAFF_NOT_ELIGIBLE)

    async def award(self, request: AwardRequest) -> int:
        """Award a badge and return the member's numeric id."""
        if request.user_id in (None, "") or request.badge_id in (None, ""):
            raise PreconditionError("Please select both a user and a badge")
        user_id = coerce_id(request.user_id)
        if user_id is None:
            raise PreconditionError("Invalid user ID")
        badge_id = coerce_id(request.badge_id)
        if badge_id is None:
            raise PreconditionError("Invalid badge ID")
        await self._require_eligible(user_id)

        await perform(
            "awarding badge",
            self.client.post(
                "/achievements",
                json={
                    "userId": user_id,
                    "badgeId": badge_id,
                    "notes": request.notes,
                },
            ),
            "Failed to award badge. Please try again.",
        )
        logger.info(f"Badge {badge_id} awarded to user {user_id}")
        self.refresh.bump()
        return user_id

    async def revoke(self, user_id: int, badge_id: int, confirm: Confirm) -> bool:
        if not await ask(confirm, REVOKE_BADGE_PROMPT):
            return False
        await perform(
            "revoking badge",
            self.client.delete(f"/achievements/{user_id}/{badge_id}"),
            "Failed to revoke badge. Please try again.",
        )
        logger.info(f"Badge {badge_id} revoked from user {user_id}")
        self.refresh.bump()
        return True

    async def user_badges(self, user_id: int) -> UserAchievements:
        data = await perform(
            "fetching user badges",
            self.client.get(f"/achievements/user/{user_id}"),
            "Failed to load badges. Please try again later.",
        )
        return UserAchievements(
            user_id=user_id,
            badges=[
                AchievementPublic.model_validate(badge)
                for badge in data.get("badges") or []
            ],
        )

    async def statistics(self) -> AchievementStatistics:
        data = await perform(
            "fetching achievement statistics",
            self.client.get("/achievements/statistics"),
            "Failed to load statistics. Please try again later.",
        )
        return AchievementStatistics.model_validate(data.get("stats") or {})


class UserBadgeList:
    """
    Badges of one member, re-fetched whenever the ledger's counter moves
    or the list is older than ``max_age`` seconds.
    """

    def __init__(self, user_id: int, refresh: RefreshCounter, max_age: float | None = None):
        self.user_id = user_id
        self.refresh = refresh
        self.max_age = max_age
        self.badges: list[AchievementPublic] = []
        self.loaded_at: int | None = None
        self.fetched_at = 0.0

    @property
    def is_stale(self) -> bool:
        if self.loaded_at is None or self.refresh.is_stale(self.loaded_at):
            return True
        if self.max_age is None:
            return False
        return time.monotonic() - self.fetched_at > self.max_age

    async def load(self, ledger: BadgeLedger) -> list[AchievementPublic]:
        seen = self.refresh.value
        result = await ledger.user_badges(self.user_id)
        self.badges = result.badges
        self.loaded_at = seen
        self.fetched_at = time.monotonic()
        return self.badges

    async def get(self, ledger: BadgeLedger) -> list[AchievementPublic]:
        if self.is_stale:
            await self.load(ledger)
        return self.badges


class BadgeRecords:
    """
    Members' badge lists shared across page views.

    All lists watch one ``RefreshCounter``; ledgers handed out by
    ``ledger()`` bump it, so an award or revoke through any view makes
    every list re-fetch on its next read.
    """

    def __init__(self, max_age: float | None = None):
        self.refresh = RefreshCounter()
        self.max_age = max_age
        self._lists: dict[int, UserBadgeList] = {}

    def ledger(self, client: ApiClient) -> BadgeLedger:
        return BadgeLedger(client, self.refresh)

    def for_user(self, user_id: int) -> UserBadgeList:
        if user_id not in self._lists:
            self._lists[user_id] = UserBadgeList(user_id, self.refresh, self.max_age)
        return self._lists[user_id]

    async def user_badges(self, ledger: BadgeLedger, user_id: int) -> UserAchievements:
        badges = await self.for_user(user_id).get(ledger)
        return UserAchievements(user_id=user_id, badges=badges)


badge_records = BadgeRecords(max_age=settings.BADGE_RECORDS_MAX_AGE)


def get_badge_records() -> BadgeRecords:
    return badge_records

import asyncio
import logging

from scoutbase.api.notifications.schemas import NotificationInbox, NotificationPublic
from scoutbase.core.actions import perform
from scoutbase.core.client import ApiClient

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


async def list_notifications(
    client: ApiClient, limit: int = PAGE_SIZE, offset: int = 0
) -> list[NotificationPublic]:
    """The signed-in member's notifications, newest first."""
    data = await perform(
        "fetching notifications",
        client.get("/notifications", params={"limit": limit, "offset": offset}),
        "Failed to load notifications. Please try again later.",
    )
    return [
        NotificationPublic.model_validate(item)
        for item in data.get("notifications") or []
    ]


async def unread_count(client: ApiClient) -> int:
    data = await perform(
        "fetching unread notification count",
        client.get("/notifications/unread/count"),
        "Failed to load notifications. Please try again later.",
    )
    return int(data.get("count") or 0)


async def load_inbox(
    client: ApiClient, limit: int = PAGE_SIZE, offset: int = 0
) -> NotificationInbox:
    notifications, count = await asyncio.gather(
        list_notifications(client, limit, offset), unread_count(client)
    )
    return NotificationInbox(notifications=notifications, unread_count=count)


async def mark_read(client: ApiClient, notification_id: int) -> NotificationInbox:
    await perform(
        "marking notification as read",
        client.put(f"/notifications/{notification_id}/read"),
        "Failed to mark notification as read. Please try again.",
    )
    return await load_inbox(client)


async def mark_all_read(client: ApiClient) -> NotificationInbox:
    response = await perform(
        "marking all notifications as read",
        client.put("/notifications/read/all"),
        "Failed to mark all notifications as read. Please try again.",
    )
    logger.info(response.get("message") or "Notifications marked as read")
    return await load_inbox(client)


async def delete_notification(client: ApiClient, notification_id: int) -> NotificationInbox:
    await perform(
        "deleting notification",
        client.delete(f"/notifications/{notification_id}"),
        "Failed to delete notification. Please try again.",
    )
    logger.info(f"Notification {notification_id} deleted")
    return await load_inbox(client)

from fastapi import APIRouter, Query

from scoutbase.api.notifications import service
from scoutbase.api.notifications.schemas import NotificationInbox, UnreadCount
from scoutbase.core.auth.dependencies import DependsAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/notifications")


@router.get("", summary="Notifications of the signed-in member")
async def get_inbox(
    client: ClientDep,
    user: DependsAuth,
    limit: int = Query(service.PAGE_SIZE, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> NotificationInbox:
    return await service.load_inbox(client, limit, offset)


@router.get("/unread-count", summary="Number of unread notifications")
async def get_unread_count(client: ClientDep, user: DependsAuth) -> UnreadCount:
    return UnreadCount(count=await service.unread_count(client))


@router.put("/read-all", summary="Mark every notification as read")
async def mark_all_read(client: ClientDep, user: DependsAuth) -> NotificationInbox:
    return await service.mark_all_read(client)


@router.put("/{notification_id}/read", summary="Mark a notification as read")
async def mark_read(
    client: ClientDep, user: DependsAuth, notification_id: int
) -> NotificationInbox:
    return await service.mark_read(client, notification_id)


@router.delete("/{notification_id}", summary="Delete a notification")
async def delete_notification(
    client: ClientDep, user: DependsAuth, notification_id: int
) -> NotificationInbox:
    return await service.delete_notification(client, notification_id)

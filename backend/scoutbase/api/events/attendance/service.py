import logging
from datetime import datetime, timezone

from scoutbase.api.events.attendance.schemas import (
    AttendanceActions,
    AttendanceRecord,
    AttendanceRow,
    AttendanceSheet,
    AttendanceStatus,
)
from scoutbase.api.events.schemas import EventParticipant, EventPublic
from scoutbase.api.events.service import get_event
from scoutbase.core.actions import perform
from scoutbase.core.client import ApiClient
from scoutbase.response import PreconditionError

logger = logging.getLogger(__name__)

# Actions a row offers in each state. A completed record is terminal.
ROW_ACTIONS = {
    AttendanceStatus.not_checked_in: [AttendanceActions.check_in],
    AttendanceStatus.checked_in: [AttendanceActions.check_out],
    AttendanceStatus.completed: [],
}


def attendance_status(record: AttendanceRecord | None) -> AttendanceStatus:
    if record is None or record.check_in_time is None:
        return AttendanceStatus.not_checked_in
    if record.check_out_time is None:
        return AttendanceStatus.checked_in
    return AttendanceStatus.completed


def _display_name(participant: EventParticipant) -> str:
    name = f"{participant.first_name or ''} {participant.last_name or ''}".strip()
    return name or participant.username or f"User {participant.user_id}"


def build_sheet(event: EventPublic, records: list[AttendanceRecord]) -> AttendanceSheet:
    by_user = {record.user_id: record for record in records}
    rows = []
    for participant in event.participants:
        record = by_user.get(participant.user_id)
        status = attendance_status(record)
        rows.append(
            AttendanceRow(
                user_id=participant.user_id,
                name=_display_name(participant),
                status=status,
                actions=ROW_ACTIONS[status],
                check_in_time=record.check_in_time if record else None,
                check_out_time=record.check_out_time if record else None,
            )
        )
    return AttendanceSheet(event_id=event.id, title=event.title, rows=rows)


async def list_attendance(client: ApiClient, event_id: int) -> list[AttendanceRecord]:
    data = await perform(
        "fetching attendance",
        client.get(f"/events/{event_id}/attendance"),
        "Failed to load attendance data. Please try again later.",
    )
    return [AttendanceRecord.model_validate(row) for row in data.get("attendance") or []]


async def load_sheet(client: ApiClient, event_id: int) -> AttendanceSheet:
    event = await get_event(client, event_id)
    records = await list_attendance(client, event_id)
    return build_sheet(event, records)


def _require_action(sheet: AttendanceSheet, user_id: int, action: AttendanceActions) -> None:
    row = next((row for row in sheet.rows if row.user_id == user_id), None)
    if row is None:
        raise PreconditionError("This user is not registered for the event")
    if action not in row.actions:
        if row.status == AttendanceStatus.completed:
            raise PreconditionError("Attendance for this user is already complete")
        if action == AttendanceActions.check_out:
            raise PreconditionError("Cannot check out before checking in")
        raise PreconditionError("This user is already checked in")


async def check_in(
    client: ApiClient, event_id: int, user_id: int, now: datetime | None = None
) -> AttendanceSheet:
    sheet = await load_sheet(client, event_id)
    _require_action(sheet, user_id, AttendanceActions.check_in)
    now = now or datetime.now(timezone.utc)
    await perform(
        "recording check-in",
        client.post(
            "/events/attendance",
            json={"eventId": event_id, "userId": user_id, "checkInTime": now.isoformat()},
        ),
        "Failed to record check-in",
    )
    logger.info(f"User {user_id} checked in to event {event_id}")
    return await load_sheet(client, event_id)


async def check_out(
    client: ApiClient, event_id: int, user_id: int, now: datetime | None = None
) -> AttendanceSheet:
    sheet = await load_sheet(client, event_id)
    _require_action(sheet, user_id, AttendanceActions.check_out)
    now = now or datetime.now(timezone.utc)
    await perform(
        "recording check-out",
        client.put(
            f"/events/{event_id}/attendance",
            json={"userId": user_id, "checkOutTime": now.isoformat()},
        ),
        "Failed to record check-out",
    )
    logger.info(f"User {user_id} checked out of event {event_id}")
    return await load_sheet(client, event_id)

from fastapi import APIRouter

from scoutbase.api.events.attendance import service
from scoutbase.api.events.attendance.schemas import AttendanceAction, AttendanceSheet
from scoutbase.core.auth.dependencies import StaffAuth
from scoutbase.core.portal import ClientDep

router = APIRouter(prefix="/{event_id}/attendance")


@router.get("", summary="Attendance sheet of an event")
async def get_attendance(client: ClientDep, user: StaffAuth, event_id: int) -> AttendanceSheet:
    return await service.load_sheet(client, event_id)


@router.post("/check-in", summary="Check a participant in")
async def check_in(
    client: ClientDep, user: StaffAuth, event_id: int, action: AttendanceAction
) -> AttendanceSheet:
    return await service.check_in(client, event_id, action.user_id)


@router.post("/check-out", summary="Check a participant out")
async def check_out(
    client: ClientDep, user: StaffAuth, event_id: int, action: AttendanceAction
) -> AttendanceSheet:
    return await service.check_out(client, event_id, action.user_id)

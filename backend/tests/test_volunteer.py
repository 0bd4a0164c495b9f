import pytest

from conftest import event_payload
from scoutbase.api.events.schemas import EventPublic
from scoutbase.api.events.volunteer import service
from scoutbase.response import PreconditionError

HELPER_PROFILE = {
    "success": True,
    "helper": {"id": 11, "userId": 5, "disclosureStatus": True, "trainingCompleted": False},
}


def make_event(**overrides) -> EventPublic:
    return EventPublic.model_validate(event_payload(**overrides))


@pytest.mark.asyncio
async def test_helper_without_profile_needs_registration(portal, client_for):
    portal.add("GET", "/helpers/user/5", {"message": "Helper profile not found for this user"}, status=404)
    client = client_for("helper", user_id=5)

    state = await service.volunteer(client, make_event())

    assert state.needs_registration
    assert not state.can_volunteer
    assert portal.calls("POST") == []


@pytest.mark.asyncio
async def test_empty_profile_body_also_needs_registration(portal, client_for):
    portal.add("GET", "/helpers/user/5", {"success": True, "helper": None})
    client = client_for("helper", user_id=5)

    state = await service.volunteer_state(client, make_event())

    assert state.needs_registration


@pytest.mark.asyncio
async def test_helper_with_profile_volunteers_once(portal, client_for):
    portal.add("GET", "/helpers/user/5", HELPER_PROFILE)
    portal.add("POST", "/events/1/volunteer", {"success": True})
    client = client_for("helper", user_id=5)

    state = await service.volunteer(client, make_event())

    assert state.is_volunteered
    assert not state.can_volunteer
    assert state.helper_id == 11
    assert len(portal.calls("POST", "/events/1/volunteer")) == 1


@pytest.mark.asyncio
async def test_already_volunteered_helper_is_not_sent_again(portal, client_for):
    portal.add("GET", "/helpers/user/5", HELPER_PROFILE)
    client = client_for("helper", user_id=5)
    event = make_event(helpers=[{"id": 11, "confirmed": False}])

    state = await service.volunteer(client, event)

    assert state.is_volunteered
    assert portal.calls("POST") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [None, "public", "admin"])
async def test_only_helpers_and_leaders_may_volunteer(portal, client_for, role):
    client = client_for(role)

    with pytest.raises(PreconditionError) as exc_info:
        await service.volunteer(client, make_event())

    assert exc_info.value.message == "You must be logged in as a helper to volunteer"
    assert portal.requests == []


@pytest.mark.asyncio
async def test_roster_lists_available_helpers_minus_assigned(portal, client_for):
    portal.add(
        "GET",
        "/events/1",
        {"event": event_payload(endTime=None, helpers=[{"id": 1, "firstName": "Raksha", "confirmed": True}])},
    )
    portal.add(
        "GET",
        "/events/1/available-helpers",
        {"helpers": [{"id": 1, "firstName": "Raksha"}, {"id": 2, "firstName": "Baloo"}]},
    )
    client = client_for("leader")

    roster = await service.helper_roster(client, 1)

    assert [helper.id for helper in roster.available] == [2]
    assert roster.picker_enabled
    assert roster.helpers_needed == 1
    params = portal.calls("GET", "/events/1/available-helpers")[0].url.params
    assert params["eventDate"] == "2099-07-01"
    assert params["startTime"] == "09:00"
    assert params["endTime"] == "09:00"


@pytest.mark.asyncio
async def test_roster_picker_is_disabled_without_start_time(portal, client_for):
    portal.add("GET", "/events/1", {"event": event_payload(startTime=None)})
    client = client_for("leader")

    roster = await service.helper_roster(client, 1)

    assert not roster.picker_enabled
    assert roster.picker_message == service.NO_SCHEDULE_MESSAGE
    assert roster.available == []
    assert portal.calls("GET", "/events/1/available-helpers") == []


@pytest.mark.asyncio
async def test_assign_confirm_remove_round_trip(portal, client_for):
    assigned = {"id": 7, "firstName": "Hathi", "confirmed": False}
    portal.add("POST", "/events/helpers", {"success": True})
    portal.add("PUT", "/events/1/helpers/7", {"success": True})
    portal.add("DELETE", "/events/1/helpers/7", {"success": True})
    portal.add("GET", "/events/1", {"event": event_payload(helpers=[assigned])})
    portal.add("GET", "/events/1", {"event": event_payload(helpers=[{**assigned, "confirmed": True}])})
    portal.add("GET", "/events/1", {"event": event_payload(helpers=[])})
    client = client_for("leader")

    event = await service.assign_helper(client, 1, 7)
    assert [(h.id, h.confirmed) for h in event.helpers] == [(7, False)]

    event = await service.confirm_helper(client, 1, 7, True)
    assert [(h.id, h.confirmed) for h in event.helpers] == [(7, True)]

    event = await service.remove_helper(client, 1, 7)
    assert event.helpers == []

    assert portal.body(portal.calls("POST", "/events/helpers")[0]) == {
        "eventId": 1,
        "helperId": 7,
        "confirmed": False,
    }
    assert portal.body(portal.calls("PUT", "/events/1/helpers/7")[0]) == {"confirmed": True}

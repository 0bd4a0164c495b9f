import pytest

from conftest import event_payload
from scoutbase.api.helpers import service
from scoutbase.response import ActionError, PreconditionError

PROFILE = {"success": True, "helper": {"id": 11, "userId": 5, "contactNumber": "0123"}}


@pytest.mark.asyncio
async def test_dashboard_lists_volunteered_events(portal, client_for):
    portal.add("GET", "/helpers/user/5", PROFILE)
    portal.add(
        "GET",
        "/events/helpers/11",
        {"events": [event_payload(1, confirmed=True), event_payload(2, confirmed=False)]},
    )
    client = client_for("helper", user_id=5)

    dashboard = await service.load_dashboard(client)

    assert not dashboard.needs_registration
    assert [(e.id, e.confirmed) for e in dashboard.events] == [(1, True), (2, False)]
    assert await service.volunteered_event_ids(client) == {1, 2}


@pytest.mark.asyncio
async def test_dashboard_without_profile_asks_for_registration(portal, client_for):
    portal.add("GET", "/helpers/user/5", {"message": "Helper profile not found for this user"}, status=404)

    dashboard = await service.load_dashboard(client_for("helper", user_id=5))

    assert dashboard.needs_registration
    assert dashboard.events == []
    assert portal.calls("GET", "/events/helpers/11") == []


@pytest.mark.asyncio
async def test_profile_lookup_failure_is_reported(portal, client_for):
    portal.add("GET", "/helpers/user/5", {"message": "Server error: boom"}, status=500)

    with pytest.raises(ActionError):
        await service.get_profile(client_for("helper", user_id=5))


@pytest.mark.asyncio
async def test_register_helper_posts_profile_with_user_id(portal, client_for):
    portal.add("POST", "/helpers/register", PROFILE, status=201)
    client = client_for("helper", user_id=5)

    profile = await service.register_helper(
        client, {"contactNumber": "0123", "skills": "First aid"}
    )

    assert profile.id == 11
    body = portal.body(portal.calls("POST", "/helpers/register")[0])
    assert body["userId"] == 5
    assert body["contactNumber"] == "0123"
    assert body["skills"] == "First aid"


@pytest.mark.asyncio
async def test_register_helper_needs_contact_number(portal, client_for):
    with pytest.raises(PreconditionError):
        await service.register_helper(client_for("helper", user_id=5), {"skills": "Knots"})
    assert portal.requests == []

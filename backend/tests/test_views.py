import pytest

from conftest import auth_headers, event_payload, make_token

USERS = {
    "users": [
        {"id": 1, "username": "akela", "email": "a@pack.org", "firstName": "Anna", "role": "leader"},
        {"id": 2, "username": "mowgli", "email": "m@pack.org", "firstName": "Tom", "role": "public"},
    ]
}


@pytest.mark.asyncio
async def test_guarded_view_redirects_anonymous_viewer_to_login(views, portal):
    response = await views.get("/views/users")

    assert response.status_code == 307
    assert response.headers["location"] == "/login"
    assert response.json()["error_code"] == "LOGIN_REQUIRED"
    assert portal.requests == []


@pytest.mark.asyncio
async def test_guarded_view_sends_wrong_role_home(views, portal):
    response = await views.get("/views/users", headers=auth_headers("helper"))

    assert response.status_code == 307
    assert response.headers["location"] == "/"


@pytest.mark.asyncio
async def test_expired_token_counts_as_anonymous(views, portal):
    response = await views.get(
        "/views/users", headers={"x-auth-token": make_token("admin", expires_in=-5)}
    )
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_staff_view_lists_users_in_camel_case(views, portal):
    portal.add("GET", "/admin/users", USERS)

    response = await views.get(
        "/views/users", params={"search": "tom"}, headers=auth_headers("admin")
    )

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": 2,
            "username": "mowgli",
            "email": "m@pack.org",
            "firstName": "Tom",
            "lastName": None,
            "role": "public",
            "createdAt": None,
            "lastLogin": None,
        }
    ]
    forwarded = portal.calls("GET", "/admin/users")[0]
    assert forwarded.headers["x-auth-token"]


@pytest.mark.asyncio
async def test_bearer_header_is_accepted(views, portal):
    portal.add("GET", "/admin/users", USERS)

    response = await views.get(
        "/views/users", headers={"Authorization": f"Bearer {make_token('leader')}"}
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_destructive_view_asks_for_confirmation(views, portal):
    response = await views.delete("/views/events/1", headers=auth_headers("leader"))

    assert response.status_code == 428
    body = response.json()
    assert body["error_code"] == "CONFIRMATION_REQUIRED"
    assert body["message"] == "Are you sure you want to delete this event?"
    assert portal.requests == []


@pytest.mark.asyncio
async def test_confirmed_delete_returns_refreshed_listing(views, portal):
    portal.add("DELETE", "/events/1", {"success": True})
    portal.add("GET", "/events", {"events": [event_payload(2)]})

    response = await views.delete(
        "/views/events/1", params={"confirmed": "true"}, headers=auth_headers("leader")
    )

    assert response.status_code == 200
    assert [event["id"] for event in response.json()] == [2]


@pytest.mark.asyncio
async def test_event_page_for_anonymous_viewer(views, portal):
    portal.add("GET", "/events/1", {"event": event_payload()})

    response = await views.get("/views/events/1")

    assert response.status_code == 200
    body = response.json()
    assert body["event"]["notes"] is None
    assert body["event"]["equipment"] is None
    assert body["registration"]["state"] == "login_required"
    assert body["volunteer"]["canVolunteer"] is False
    assert portal.calls("GET", "/events/1/register") == []


@pytest.mark.asyncio
async def test_hidden_event_is_not_found(views, portal):
    portal.add("GET", "/events/1", {"event": event_payload(leadersOnlyVisible=True)})

    response = await views.get("/views/events/1", headers=auth_headers("helper"))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_event_page_for_helper_with_profile(views, portal):
    portal.add("GET", "/events/1", {"event": event_payload()})
    portal.add("GET", "/events/1/register", {"isRegistered": False})
    portal.add("GET", "/helpers/user/5", {"helper": {"id": 11, "userId": 5}})

    response = await views.get("/views/events/1", headers=auth_headers("helper", 5))

    body = response.json()
    assert body["registration"]["state"] == "open"
    assert body["volunteer"] == {
        "canVolunteer": True,
        "isVolunteered": False,
        "needsRegistration": False,
        "helperId": 11,
    }


@pytest.mark.asyncio
async def test_precondition_failure_is_reported_as_error(views, portal):
    response = await views.post(
        "/views/achievements",
        json={"userId": "abc", "badgeId": 10},
        headers=auth_headers("leader"),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid user ID"
    assert portal.requests == []


@pytest.mark.asyncio
async def test_portal_message_reaches_the_page(views, portal):
    portal.add("POST", "/events/1/register", {"message": "Registration closed"}, status=400)
    portal.add("GET", "/events/1", {"event": event_payload()})

    response = await views.post(
        "/views/events/1/registration", json={"notes": ""}, headers=auth_headers("public")
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Registration closed"


@pytest.mark.asyncio
async def test_board_for_anonymous_viewer(views, portal):
    portal.add(
        "GET",
        "/announcements",
        {
            "success": True,
            "announcements": [
                {"announcement_id": 1, "title": "Hello", "content": "All", "target_role": "all", "created_at": "2025-05-01T09:00:00"},
                {"announcement_id": 2, "title": "Staff", "content": "Leaders", "target_role": "leader", "created_at": "2025-05-02T09:00:00"},
            ],
        },
    )

    response = await views.get("/views/announcements")

    assert [item["id"] for item in response.json()] == [1]


@pytest.mark.asyncio
async def test_helper_dashboard_is_not_for_admins(views, portal):
    response = await views.get("/views/helpers/dashboard", headers=auth_headers("admin"))
    assert response.status_code == 307
    assert response.headers["location"] == "/"


@pytest.mark.asyncio
async def test_session_view_reports_roles(views, portal):
    portal.add("GET", "/auth/user", {"user": {"id": 1, "username": "akela", "role": "leader"}})

    response = await views.get("/views/auth/session", headers=auth_headers("leader"))

    body = response.json()
    assert body["isAuthenticated"] is True
    assert body["role"] == "leader"
    assert body["isStaff"] is True
    assert body["canUseHelperDashboard"] is True
    assert body["user"]["username"] == "akela"


@pytest.mark.asyncio
async def test_attendance_check_out_before_check_in_is_refused(views, portal):
    portal.add("GET", "/events/1", {"event": event_payload(participants=[{"userId": 4, "status": "confirmed"}])})
    portal.add("GET", "/events/1/attendance", {"attendance": []})

    response = await views.post(
        "/views/events/1/attendance/check-out",
        json={"userId": 4},
        headers=auth_headers("leader"),
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "PRECONDITION_FAILED"
    assert portal.calls("PUT") == []


@pytest.mark.asyncio
async def test_responses_carry_processing_time(views, portal):
    response = await views.get("/views/users")
    assert "x-process-time-ms" in response.headers


@pytest.mark.asyncio
async def test_award_view_refuses_staff_member(views, portal):
    portal.add(
        "GET",
        "/admin/users",
        {"users": [{"id": 7, "username": "akela", "role": "leader"}]},
    )
    portal.add("POST", "/achievements", {"success": True})

    response = await views.post(
        "/views/achievements",
        json={"userId": 7, "badgeId": 3},
        headers=auth_headers("leader"),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Badges cannot be awarded to admins or leaders"
    assert portal.calls("POST", "/achievements") == []


@pytest.mark.asyncio
async def test_award_view_returns_refreshed_badges(views, portal, badge_records):
    portal.add("GET", "/achievements/user/3", {"badges": []})
    portal.add("GET", "/achievements/user/3", {"badges": [{"id": 10, "name": "Camper"}]})
    portal.add("GET", "/admin/users", {"users": [{"id": 3, "username": "mowgli", "role": "public"}]})
    portal.add("POST", "/achievements", {"success": True})

    before = await views.get("/views/achievements/user/3", headers=auth_headers("public", 3))
    cached = await views.get("/views/achievements/user/3", headers=auth_headers("public", 3))
    assert before.json()["badges"] == cached.json()["badges"] == []
    assert len(portal.calls("GET", "/achievements/user/3")) == 1

    response = await views.post(
        "/views/achievements",
        json={"userId": "3", "badgeId": "10"},
        headers=auth_headers("leader"),
    )

    assert response.status_code == 200
    assert [badge["name"] for badge in response.json()["badges"]] == ["Camper"]
    assert badge_records.refresh.value == 1


@pytest.mark.asyncio
async def test_event_listing_marks_volunteered_events_for_helpers(views, portal):
    portal.add("GET", "/events", {"events": [event_payload(1), event_payload(2)]})
    portal.add("GET", "/helpers/user/5", {"helper": {"id": 11, "userId": 5}})
    portal.add("GET", "/events/helpers/11", {"events": [event_payload(2)]})

    response = await views.get("/views/events", headers=auth_headers("helper", 5))

    assert [(e["id"], e["isVolunteered"]) for e in response.json()] == [(1, False), (2, True)]


@pytest.mark.asyncio
async def test_event_listing_for_members_has_no_volunteer_marks(views, portal):
    portal.add("GET", "/events", {"events": [event_payload(1)]})

    response = await views.get("/views/events", headers=auth_headers("public"))

    assert response.json()[0]["isVolunteered"] is None
    assert portal.calls("GET", "/helpers/user/1") == []

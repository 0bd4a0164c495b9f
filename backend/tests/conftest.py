import json
import time

import httpx
import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from scoutbase.api.achievements.service import BadgeRecords, get_badge_records
from scoutbase.application import application
from scoutbase.core.auth.session import SessionStore
from scoutbase.core.client import ApiClient
from scoutbase.core.portal import get_transport

PORTAL_URL = "http://portal.test/api"
TOKEN_SECRET = "test-secret-that-is-long-enough-for-hs256"


def make_token(role="public", user_id=1, expires_in=3600) -> str:
    return jwt.encode(
        {"id": user_id, "role": role, "exp": int(time.time()) + expires_in},
        TOKEN_SECRET,
        algorithm="HS256",
    )


class FakePortal:
    """In-memory stand-in for the portal API, served through httpx.MockTransport.

    Routes are registered per (method, path) with one or more responses;
    a list of responses is served in order and the last one repeats.
    Unknown routes answer 404.
    """

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def add(self, method, path, body=None, status=200):
        self.routes.setdefault((method, path), []).append((status, body))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/api"):
            path = path[len("/api"):]
        responses = self.routes.get((request.method, path))
        if not responses:
            return httpx.Response(404, json={"message": f"No route {request.method} {path}"})
        status, body = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(body, Exception):
            raise body
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method=None, path=None) -> list[httpx.Request]:
        found = []
        for request in self.requests:
            request_path = request.url.path
            if request_path.startswith("/api"):
                request_path = request_path[len("/api"):]
            if method and request.method != method:
                continue
            if path and request_path != path:
                continue
            found.append(request)
        return found

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content) if request.content else {}


@pytest.fixture
def portal():
    return FakePortal()


@pytest.fixture
def session_for():
    def build(role=None, user_id=1, user=None, expires_in=3600):
        if role is None:
            return SessionStore()
        return SessionStore(
            token=make_token(role, user_id, expires_in),
            user=user or {"id": user_id, "username": f"user{user_id}", "role": role},
        )

    return build


@pytest_asyncio.fixture
async def client_for(portal, session_for):
    """Builds an ApiClient for a session of the given role against the fake portal."""
    clients = []

    def build(role=None, user_id=1, user=None):
        client = ApiClient(
            session_for(role, user_id, user),
            base_url=PORTAL_URL,
            transport=portal.transport,
        )
        clients.append(client)
        return client

    yield build
    for client in clients:
        await client.aclose()


@pytest.fixture
def badge_records():
    return BadgeRecords()


@pytest_asyncio.fixture
async def views(portal, badge_records):
    """AsyncClient for the page views, with the portal faked."""
    application.dependency_overrides[get_transport] = lambda: portal.transport
    application.dependency_overrides[get_badge_records] = lambda: badge_records
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    application.dependency_overrides.clear()


def auth_headers(role, user_id=1) -> dict:
    return {"x-auth-token": make_token(role, user_id)}


def event_payload(event_id=1, **overrides) -> dict:
    event = {
        "id": event_id,
        "title": "Summer Camp",
        "description": "Three nights under canvas",
        "eventType": "Camp",
        "startDate": "2099-07-01",
        "endDate": "2099-07-04",
        "startTime": "09:00",
        "endTime": "17:00",
        "locationName": "Glen Nevis",
        "requiredHelpers": 2,
        "maxParticipants": 0,
        "notes": "Bring the first aid kit",
        "equipment": "Tents",
        "publicVisible": True,
        "leadersOnlyVisible": False,
        "helpersOnlyVisible": False,
        "badges": [],
        "participants": [],
        "helpers": [],
    }
    event.update(overrides)
    return event

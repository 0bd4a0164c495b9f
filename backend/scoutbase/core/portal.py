from typing import Annotated

import httpx
from fastapi import Depends, Request

from scoutbase.config import settings
from scoutbase.core.auth.session import SessionStore
from scoutbase.core.client import ApiClient


def get_token(request: Request) -> str | None:
    """Portal token forwarded by the browser, in either header style."""
    token = request.headers.get(settings.AUTH_HEADER)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_session(request: Request) -> SessionStore:
    return SessionStore(token=get_token(request))


def get_transport() -> httpx.AsyncBaseTransport | None:
    # overridden in tests with a fake portal
    return None


async def get_client(
    session: Annotated[SessionStore, Depends(get_session)],
    transport: Annotated[httpx.AsyncBaseTransport | None, Depends(get_transport)],
):
    async with ApiClient(session, transport=transport) as client:
        yield client


ClientDep = Annotated[ApiClient, Depends(get_client)]

import logging
from datetime import date

from scoutbase.api.events.registration.schemas import (
    RegistrationPanel,
    RegistrationPanelState,
    RegistrationStatus,
)
from scoutbase.api.events.schemas import EventPublic
from scoutbase.core.actions import Confirm, ask, perform
from scoutbase.core.client import ApiClient
from scoutbase.response import ApiError, PreconditionError

logger = logging.getLogger(__name__)

CANCEL_REGISTRATION_PROMPT = "Are you sure you want to cancel your registration?"


async def is_registered(client: ApiClient, event_id: int) -> bool:
    if not client.session.is_authenticated():
        return False
    try:
        data = await client.get(f"/events/{event_id}/register")
    except ApiError as exc:
        # status lookup failing leaves the panel in its unregistered state
        logger.error(f"Error checking registration status: {exc.status_code} {exc.message}")
        return False
    return RegistrationStatus.model_validate(data).is_registered


def registration_panel(
    event: EventPublic,
    is_authenticated: bool,
    registered: bool,
    today: date | None = None,
) -> RegistrationPanel:
    if not is_authenticated:
        state = RegistrationPanelState.login_required
    elif event.is_past(today):
        state = RegistrationPanelState.past_event
    elif registered:
        state = RegistrationPanelState.registered
    elif event.is_full:
        state = RegistrationPanelState.full
    else:
        state = RegistrationPanelState.open
    return RegistrationPanel(
        event_id=event.id,
        state=state,
        is_registered=registered,
        max_participants=event.max_participants,
        registered_count=event.registered_count,
    )


async def register(
    client: ApiClient,
    event: EventPublic,
    notes: str = "",
    today: date | None = None,
) -> bool:
    """Register the signed-in viewer for ``event``; returns the new registration flag."""
    if not client.session.is_authenticated():
        raise PreconditionError("You must be logged in to register for events")
    if event.is_past(today):
        raise PreconditionError("Cannot register for past events")
    if event.is_full:
        raise PreconditionError(
            "This event has reached its maximum number of participants"
        )

    await perform(
        "registering for event",
        client.post(f"/events/{event.id}/register", json={"notes": notes}),
        "Failed to register for event",
    )
    logger.info(f"User {client.session.user_id()} registered for event {event.id}")
    return True


async def cancel_registration(
    client: ApiClient, event_id: int, confirm: Confirm
) -> bool:
    """
    Cancel the viewer's registration.

    Returns the registration flag after the call: False once cancelled,
    True when the viewer declined the confirmation.
    """
    if not client.session.is_authenticated():
        raise PreconditionError("You must be logged in to cancel registration")
    if not await ask(confirm, CANCEL_REGISTRATION_PROMPT):
        return True

    await perform(
        "cancelling registration",
        client.delete(f"/events/{event_id}/register"),
        "Failed to cancel registration",
    )
    logger.info(f"User {client.session.user_id()} cancelled registration for event {event_id}")
    return False

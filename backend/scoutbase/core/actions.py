import inspect
import logging
from typing import Awaitable, Callable, TypeVar

from scoutbase.response import ActionError, ApiError, ConfirmationRequired

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Asked before a destructive action; returning False abandons the action.
Confirm = Callable[[str], "bool | Awaitable[bool]"]


def always_confirm(prompt: str) -> bool:
    return True


def never_confirm(prompt: str) -> bool:
    return False


def require_confirmation(confirmed: bool) -> Confirm:
    """Confirm for requests that carry the answer up front.

    An unconfirmed request is answered with the prompt instead of being
    silently dropped, so the caller can ask and retry.
    """

    def confirm(prompt: str) -> bool:
        if not confirmed:
            raise ConfirmationRequired(prompt)
        return True

    return confirm


async def ask(confirm: Confirm, prompt: str) -> bool:
    answer = confirm(prompt)
    if inspect.isawaitable(answer):
        answer = await answer
    if not answer:
        logger.info(f"Action not confirmed: {prompt}")
    return bool(answer)


async def perform(description: str, call: Awaitable[T], fallback: str) -> T:
    """
    Await a portal call on behalf of a page action.

    API failures are logged and re-raised as ``ActionError`` carrying the
    server's message, or ``fallback`` when the server gave none.
    """
    try:
        return await call
    except ApiError as exc:
        logger.error(f"Error {description}: {exc.status_code} {exc.message}")
        raise ActionError.from_api_error(exc, fallback) from exc

from fastapi import HTTPException, status
from fastapi.responses import ORJSONResponse


class ErrorResponse:
    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        track_id: str | None = None,
        errors: dict | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.track_id = track_id
        self.errors = errors

    def to_dict(self):
        return {
            "message": self.message,
            "errors": self.errors,
            "error_code": self.error_code,
            "track_id": self.track_id,
        }

    def get_response(self, status):
        return ORJSONResponse(
            content=self.to_dict(),
            status_code=status,
        )

    def __str__(self):
        return self.message

    def __repr__(self):
        return self.message


class CustomHTTPException(HTTPException, ErrorResponse):

    def __init__(
        self,
        status_code,
        message,
        error_code=None,
        track_id=None,
        errors=None,
        *args,
        **kwargs
    ):
        ErrorResponse.__init__(self, message, error_code, track_id, errors)
        super().__init__(status_code=status_code, detail=message, *args, **kwargs)


class ApiError(Exception):
    """Failure talking to the portal API.

    ``status_code`` is ``None`` when no response was received at all
    (connection refused, timeout, DNS failure).
    """

    def __init__(
        self, message: str, status_code: int | None = None, payload: dict | None = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def server_message(self) -> str | None:
        message = self.payload.get("message")
        if isinstance(message, str) and message:
            return message
        return None

    @property
    def is_not_found(self) -> bool:
        return self.status_code == status.HTTP_404_NOT_FOUND

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code in (
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_403_FORBIDDEN,
        )


class ActionError(Exception, ErrorResponse):
    """User-facing failure of a page action.

    The page stays interactive; the message is shown inline and the user
    retries by repeating the action.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        errors: dict | None = None,
    ):
        Exception.__init__(self, message)
        ErrorResponse.__init__(self, message, error_code=error_code, errors=errors)
        if status_code is not None:
            self.status_code = status_code

    @classmethod
    def from_api_error(cls, exc: ApiError, fallback: str) -> "ActionError":
        status_code = exc.status_code
        if status_code is None or status_code >= 500:
            status_code = status.HTTP_502_BAD_GATEWAY
        return cls(exc.server_message or fallback, status_code=status_code)


class PreconditionError(ActionError):
    """Raised before any network call when an action's inputs are not usable."""

    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(
            message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="PRECONDITION_FAILED",
            errors=errors,
        )


class ConfirmationRequired(ActionError):
    def __init__(self, prompt: str):
        super().__init__(
            prompt,
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            error_code="CONFIRMATION_REQUIRED",
        )
        self.prompt = prompt

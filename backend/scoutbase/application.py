import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import HTMLResponse
from starlette import status

from scoutbase.api.router import api_router
from scoutbase.config import configure_logging, settings
from scoutbase.response import ActionError, ErrorResponse, CustomHTTPException
from scoutbase.core.middlewares.process_time_middleware import ProcessingTimeMiddleware

configure_logging()
logger = logging.getLogger(__name__)

application = FastAPI(
    title="scoutbase",
    version=settings.APP_VERSION,
    default_response_class=ORJSONResponse,
)

application.include_router(router=api_router)
application.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
application.add_middleware(ProcessingTimeMiddleware)


@application.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    track_id = str(uuid.uuid4())
    logger.exception(f"Unhandled error on {request.method} {request.url.path} [{track_id}]")
    return ErrorResponse(
        message="Internal Server Error",
        errors={"error": "An error occurred while processing the request"},
        track_id=track_id,
    ).get_response(status.HTTP_500_INTERNAL_SERVER_ERROR)


@application.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    errors = {}

    for error in exc.errors():
        current = errors

        if len(error["loc"]) <= 1:
            current[error["loc"][0]] = error["msg"]
            break

        keys = error["loc"][1:]
        for loc in keys[:-1]:
            current = current.setdefault(loc, {})
        current[keys[-1]] = error["msg"]

    return ErrorResponse(
        message="Invalid request",
        errors=errors,
    ).get_response(status.HTTP_422_UNPROCESSABLE_ENTITY)


@application.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError):
    return exc.get_response(exc.status_code)


@application.exception_handler(CustomHTTPException)
async def http_exception_handler(request: Request, exc: CustomHTTPException):
    response = exc.get_response(exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@application.head("/ping")
async def ping():
    return HTMLResponse(content=None, status_code=status.HTTP_204_NO_CONTENT)

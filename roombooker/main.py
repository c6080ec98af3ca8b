import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from roombooker.config import settings
from roombooker.db import init_database
from roombooker.exceptions import RoomBookerError
from roombooker.routers import bookings, users
from roombooker.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = "x-access-token, Origin, Content-Type, Accept"


def setup_logging():
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing logging and database"
    setup_logging()
    init_database()
    logger.info("Room booker started")
    yield


def error_response(status_code, message, headers=None):
    content = ErrorResponse(message=message, status_code=status_code).model_dump(by_alias=True)
    headers = dict(headers or {})
    headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI):
    """Render every error kind as {"message", "statusCode"} with its HTTP status."""

    @app.exception_handler(RoomBookerError)
    async def handle_room_booker_error(request: Request, exc: RoomBookerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.context}")
        else:
            logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request.")
        if location:
            message = f"{location}: {message}"
        logger.debug(f"{request.method} {request.url.path} -> 400: {message}")
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.")


app = FastAPI(
    lifespan=lifespan,
    title="Room booker",
    description="Room booking API: bookings, the users attached to them and user profiles.",
    version="1.0.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


@app.middleware("http")
async def allow_custom_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return response


register_exception_handlers(app)

app.include_router(users.router)
app.include_router(bookings.router)


def run():
    """Serve the API with uvicorn: ``roombooker-serve`` or ``python -m roombooker.main``."""
    uvicorn.run("roombooker.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from readlog.config import Settings, load_settings
from readlog.database import create_engine, create_sessionmaker, create_tables
from readlog.errors import ReadlogError
from readlog.log import build_logger
from readlog.routers import auth, reading_activities, user_books, users
from readlog.schemas.common import ErrorResponse


def _error_body(message: str, errors: dict[str, str] | None = None) -> dict:
    return ErrorResponse(message=message, errors=errors or None).model_dump(exclude_none=True)


def _validation_errors(exc: RequestValidationError) -> tuple[str, dict[str, str]]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return "Invalid Request", {"body": "Failed to parse request body"}
        names = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        key = names[0].lower() if names else "body"
        errors.setdefault(key, error.get("msg", "Invalid value"))
    return "Validation failed", errors


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ReadlogError)
    async def readlog_error(request: Request, exc: ReadlogError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.errors))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        message, errors = _validation_errors(exc)
        request.app.state.logger.warning("%s %s: %s", request.method, request.url.path, errors)
        return JSONResponse(status_code=400, content=_error_body(message, errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        request.app.state.logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    logger = build_logger(settings)
    engine = create_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables:
            await create_tables(engine)
            logger.info("Database schema ready")
        yield
        await engine.dispose()

    app = FastAPI(title="Readlog", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.logger = logger
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)

    register_error_handlers(app)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(user_books.router)
    app.include_router(reading_activities.router)
    return app

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time

# Application routers
from learn_note.routers import auth, users, folders, topics, resources, meta
from learn_note.config import Settings, settings as default_settings
from learn_note.database import create_db_engine, create_session_factory, init_db
from learn_note.logging import setup_logging
from learn_note.utils.errors import APIError

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def _validation_message(exc: RequestValidationError) -> str:
    """Collapse pydantic's error list into the single message the API returns."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    loc = [str(part) for part in error.get("loc", ())]
    source = loc[0] if loc else "body"
    field = loc[-1] if len(loc) > 1 else None

    if error.get("type") == "missing":
        if field is None:
            return "Missing request body."
        where = "request body" if source == "body" else f"{source} parameters"
        return f"Missing {field} in {where}."

    # ValueErrors raised by our own validators carry the user-facing text
    ctx_error = (error.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    if field is None:
        return error.get("msg", "Invalid request")
    return f"{field}: {error.get('msg')}"


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or default_settings
    logger = setup_logging(settings)

    app = FastAPI(
        title="Learn Note",
        description="Folders, topics and resources for self-directed study",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    # one engine/pool per app, shared by every request it serves
    engine = create_db_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionlocal = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Type", "Authorization"],
        max_age=3600,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            "%s %s -> %s (%.4fs)",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info("%s %s invalid: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"message": message, "status": 400})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail), "status": exc.status_code},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE, "status": 500})

    # Register all API routers
    app.include_router(users.router)
    app.include_router(auth.router)
    app.include_router(folders.router)
    app.include_router(topics.router)
    app.include_router(resources.router)
    app.include_router(meta.router)

    # Health check endpoint
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "message": "Learn Note API is running",
        }

    @app.on_event("startup")
    async def startup_event():
        init_db(engine)
        logger.info("Application startup complete (version %s)", settings.APP_VERSION)

    @app.on_event("shutdown")
    async def shutdown_event():
        engine.dispose()
        logger.info("Application shutdown")

    return app


app = create_app()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .database import init_db
from .errors import RateLimited, TasklistError
from .logging_setup import setup_logging
from .routers import categories, comments, dashboard, meta, preferences, tasks, threads

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    setup_logging(settings.log_level, settings.log_dir or None)
    init_db()
    logger.info("tasklist %s ready", __version__)
    yield
    # Shutdown (nothing to do)


app = FastAPI(title="tasklist", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TasklistError)
async def tasklist_error_handler(_request: Request, exc: TasklistError) -> JSONResponse:
    content = {"detail": exc.message}
    headers = None
    if isinstance(exc, RateLimited):
        content["retry_after_ms"] = exc.retry_after_ms
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    if exc.status_code >= 500:
        logger.warning("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters get the same 400 shape as InvalidInput."""
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"][1:]) or "request"
    return JSONResponse(status_code=400, content={"detail": f"Invalid {field}: {error['msg']}"})


app.include_router(tasks.router)
app.include_router(comments.router)
app.include_router(categories.router)
app.include_router(preferences.router)
app.include_router(dashboard.router)
app.include_router(threads.router)
app.include_router(meta.router)


@app.get("/")
def health() -> dict:
    return {"status": "ok", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

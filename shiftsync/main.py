import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from shiftsync.core.database import storage
from shiftsync.core.settings import settings
from shiftsync.domains.auth.routes import router as auth_router
from shiftsync.domains.auth.service import seed_initial_admin
from shiftsync.domains.messages.routes import router as messages_router
from shiftsync.domains.shifts.routes import router as shifts_router
from shiftsync.domains.till_verifications.routes import (
    router as till_verifications_router,
)
from shiftsync.domains.time_entries.routes import router as time_entries_router
from shiftsync.domains.users.routes import router as users_router
from shiftsync.domains.venues.routes import router as venues_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    await seed_initial_admin(storage)
    yield


app = FastAPI(
    title="ShiftSync API",
    description="API for venue staff scheduling, time tracking and till reconciliation",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    if request.url.path.startswith("/api"):
        client = request.client.host if request.client else "unknown"
        logger.info("%s %s - %s", request.method, request.url.path, client)
    return await call_next(request)


# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(venues_router, prefix="/api")
app.include_router(shifts_router, prefix="/api")
app.include_router(time_entries_router, prefix="/api")
app.include_router(messages_router, prefix="/api")
app.include_router(till_verifications_router, prefix="/api")


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "ShiftSync API is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}

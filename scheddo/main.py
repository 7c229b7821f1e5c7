import asyncio
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from scheddo.config.logging import setup_logging
from scheddo.config.settings import settings
from scheddo.events.dtos import EventNotFoundError, NotEventOwnerError
from scheddo.events.routers import router as events_router
from scheddo.invitations.dtos import InvitationError, InviteeLookupFailure
from scheddo.invitations.routers import router as invitations_router
from scheddo.jobs import job_queue
from scheddo.models import registry  # noqa: F401
from scheddo.routers.healthz.router import router as healthz_router
from scheddo.validation import ValidationError
from scheddo.votes.dtos import AlreadyVotedError
from scheddo.votes.routers import router as votes_router

setup_logging()
logger = logging.getLogger(__name__)


async def run_migrations():
    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        await run_migrations()
    yield
    await job_queue.drain()


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="sched.do API",
    description="API for scheduling events by voting on suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvitationError)
async def invitation_error_handler(request: Request, exc: InvitationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"errors": exc.errors})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"errors": exc.errors}
    )


@app.exception_handler(AlreadyVotedError)
async def already_voted_handler(request: Request, exc: AlreadyVotedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT, content={"errors": {"suggestion": [str(exc)]}}
    )


@app.exception_handler(InviteeLookupFailure)
async def invitee_lookup_failure_handler(request: Request, exc: InviteeLookupFailure) -> JSONResponse:
    logger.warning(f"Invitee lookup failed: {exc}")
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


@app.exception_handler(EventNotFoundError)
async def event_not_found_handler(request: Request, exc: EventNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(NotEventOwnerError)
async def not_event_owner_handler(request: Request, exc: NotEventOwnerError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


# Include routers
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(events_router, tags=["Events"])
app.include_router(invitations_router, tags=["Invitations"])
app.include_router(votes_router, tags=["Votes"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the sched.do API"}

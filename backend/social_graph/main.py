"""Social Graph API — application assembly: settings, policy, routers, error handlers.

Invariants:
    - The exclusion policy is built once from settings and stored on app.state;
      nothing swaps it while the process serves traffic
    - The database manager exists only between lifespan startup and shutdown
      (app.state.db_manager), so requests before startup fail readiness
    - Routers are included explicitly, one per resource

Design Decisions:
    - Lifespan context manager instead of startup/shutdown events
    - Tests replace app.state.db_manager and app.state.exclusion_policy rather
      than patching module globals
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from social_graph.api.error_handlers import register_error_handlers
from social_graph.api.routes import exclusions, friends, health, profiles
from social_graph.config import get_settings
from social_graph.core.exclusion_policy import select_policy
from social_graph.infrastructure.database import DatabaseSessionManager
from social_graph.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await db_manager.create_schema()
    app.state.db_manager = db_manager
    logger.info(
        "Social Graph API started",
        extra={"variant": app.state.exclusion_policy.variant.value},
    )
    yield
    logger.info("Social Graph API shutting down")
    await db_manager.close()
    app.state.db_manager = None


app = FastAPI(
    title="Social Graph API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.state.exclusion_policy = select_policy(settings.exclusion_variant)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(friends.router)
app.include_router(exclusions.router)
app.include_router(profiles.router)

register_error_handlers(app)

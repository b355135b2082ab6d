"""
Corkboard — FastAPI application entry-point.

Run with:
    uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.config import settings
from app.database import DB_TYPE, async_session, create_tables, engine
from app.errors import register_exception_handlers

# ── Import routers ──
from app.routers import admin, auth, boards, cards, notifications, system, users, ws
from app.services.auth import cleanup_expired_sessions

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan: create tables and prune sessions on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await create_tables()

    async with async_session() as db:
        await cleanup_expired_sessions(db)
        await db.commit()

    logger.info(f"{settings.APP_NAME} {settings.VERSION} started (db={DB_TYPE})")
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Kanban boards with cards, board permissions and per-user notifications.",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))
register_exception_handlers(app)

# ── Register API routers ──
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(users.router, prefix=settings.API_PREFIX)
app.include_router(admin.router, prefix=settings.API_PREFIX)
app.include_router(boards.router, prefix=settings.API_PREFIX)
app.include_router(cards.router, prefix=settings.API_PREFIX)
app.include_router(notifications.router, prefix=settings.API_PREFIX)
app.include_router(system.router, prefix=settings.API_PREFIX)
app.include_router(ws.router)

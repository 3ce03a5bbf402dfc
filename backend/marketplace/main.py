"""
Marketplace Backend - FastAPI Application

Accounts, business clients, listings, bookmarks, cart, messaging, admin
moderation with an audit trail, and a contact form.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from marketplace.config import get_settings
from marketplace.database.connections import get_mongo_client, close_connections
from marketplace.database.registry import sync_registry, create_indexes
from marketplace.dependencies.auth import GuardRedirect
from marketplace.routers import account, admin, auth, contact, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize database connection
    - Sync database registry
    - Create indexes

    Shutdown:
    - Close database connection
    """
    logger.info("Starting up Marketplace Backend...")

    try:
        client = await get_mongo_client()
        await sync_registry(client)
        await create_indexes(client)
        logger.info("Database registry synced and indexes created")
    except Exception as e:
        logger.warning("Database initialization warning: %s", e)

    yield

    logger.info("Shutting down Marketplace Backend...")
    await close_connections()


settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Marketplace API",
    description="""
## Marketplace API

### Features
- **Accounts**: users and business clients sharing one account space
- **Listings, bookmarks, cart and messages** stored on the account
- **Admin**: moderation (suspend, ban, approve) with an audit trail
- **Contact**: public contact form

### Authentication
Log in with `POST /login`; the session cookie identifies you afterwards.
Protected routes redirect to `/login` when there is no session and admin
routes redirect to `/dashboard` for non-admins. The reason is left as a
notice, returned by `GET /login` and `GET /dashboard`.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret_key,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.session_https_only,
)


@app.exception_handler(GuardRedirect)
async def guard_redirect_handler(request: Request, exc: GuardRedirect):
    """Turn a refused guard into the redirect it asked for."""
    return RedirectResponse(url=exc.location, status_code=exc.status_code)


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(account.router)
app.include_router(contact.router)
app.include_router(admin.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Marketplace API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }

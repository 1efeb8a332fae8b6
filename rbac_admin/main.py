"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rbac_admin.core.config import settings
from rbac_admin.core.middleware import setup_middleware
from rbac_admin.core.exceptions import RBACAdminError, StorageError
from rbac_admin.db.session import SessionLocal, init_db
from rbac_admin.db.seeds import seed_defaults

from rbac_admin.api.auth import router as auth_router
from rbac_admin.api.roles import router as roles_router
from rbac_admin.api.users import router as users_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("rbac_admin")


def bootstrap() -> None:
    """Create tables and seed baseline roles and the admin user."""
    try:
        init_db()
    except Exception:
        logger.exception("Database initialisation failed")
        return

    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting %s API", settings.APP_NAME)
    bootstrap()

    yield

    logger.info("Shutting down %s API", settings.APP_NAME)


app = FastAPI(
    title="RBAC Admin API",
    description="Users, roles and permission-gated administration",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)


@app.exception_handler(RBACAdminError)
async def rbac_exception_handler(request: Request, exc: RBACAdminError):
    if isinstance(exc, StorageError):
        logger.error(
            "[%s] %s %s failed: %s",
            getattr(request.state, "request_id", "-"),
            request.method,
            request.url.path,
            exc.message,
        )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )

# Register routers
app.include_router(auth_router, prefix="/api")
app.include_router(roles_router, prefix="/api")
app.include_router(users_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/api/health")
async def health():
    """Quick health check endpoint."""
    return {"status": "ok"}

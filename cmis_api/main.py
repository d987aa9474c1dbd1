### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Server -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
CMIS Admin Console API - Main Application

FastAPI application entry point that provides:
- User/role directory administration
- Registration application review (approve / reject / request info)
- County management and in-app notifications
- Session authentication, request logging and attribution
- OpenAPI documentation at /api/docs

Usage:
    # Development
    uvicorn cmis_api.main:app --reload --port 8000

    # Production
    uvicorn cmis_api.main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cmis_api.config import get_api_settings, get_app_config
from cmis_api.database import SessionLocal, engine, get_db, init_db
from cmis_api.dependencies import close_mailer, get_mailer
from cmis_api.errors import ConsoleError
from cmis_api.middleware import RequestLoggingMiddleware
from cmis_api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from cmis_api.models import RoleName, Tenant, TenantType, User
from cmis_api.routers import (
    applications_router,
    auth_router,
    cooperative_types_router,
    documents_router,
    notifications_router,
    tenants_router,
    users_router,
)
from cmis_api.schemas.responses import ErrorResponse, HealthResponse
from cmis_api.services import IdentityProvider, NewUser, UserDirectory
from cmis_api.utils import configure_service_logging

# Load settings
settings = get_api_settings()


async def _setup_initial_super_admin():
    """
    Create the first SUPER_ADMIN on first run if no users exist.

    - Creates the NATIONAL tenant from bootstrap.tenant_name if missing
    - Provisions bootstrap.admin_email with a temporary password
    - Displays the password ONCE in the console (won't be shown again)
    """
    db = SessionLocal()
    try:
        if db.query(User).first():
            return  # Directory already populated

        bootstrap = get_app_config().bootstrap

        national = db.query(Tenant).filter(Tenant.type == TenantType.NATIONAL.value).first()
        if not national:
            national = Tenant(name=bootstrap.tenant_name, type=TenantType.NATIONAL.value)
            db.add(national)
            db.commit()
            db.refresh(national)

        identity = IdentityProvider(db, settings.secret_key, settings.token_ttl_minutes)
        created = await UserDirectory(db, identity).create_user(
            NewUser(
                email=bootstrap.admin_email,
                full_name=bootstrap.admin_name,
                phone=bootstrap.admin_phone,
                id_number=bootstrap.admin_id_number,
                tenant_id=national.id,
                role=RoleName.SUPER_ADMIN.value,
            )
        )

        # Display the password prominently (only shown once!)
        print("\n" + "=" * 70)
        print("  INITIAL SUPER ADMIN CREATED")
        print("=" * 70)
        print(f"\n  Email:    {created.email}")
        print(f"  Password: {created.temp_password}\n")
        print("  IMPORTANT: Save this password now! It will NOT be shown again.")
        print("=" * 70 + "\n")

    except ConsoleError as e:
        print(f"Warning: Could not create initial super admin: {e.message}")
    finally:
        db.close()


def _check_pending_migrations():
    """
    Check for pending Alembic migrations on startup.

    Logs a warning if the database schema is not up to date.
    Does not block startup - just warns the administrator.
    """
    try:
        from alembic.config import Config
        from alembic.runtime.migration import MigrationContext
        from alembic.script import ScriptDirectory

        alembic_cfg = Config("alembic.ini")
        script = ScriptDirectory.from_config(alembic_cfg)

        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()

        head_rev = script.get_current_head()

        if current_rev is None:
            print("\n" + "=" * 70)
            print("  DATABASE NOT UNDER MIGRATION CONTROL")
            print("=" * 70)
            print("\n  Tables were created directly. Stamp the database with:")
            print("\n    alembic stamp head")
            print("=" * 70 + "\n")
        elif current_rev != head_rev:
            print("\n" + "=" * 70)
            print("  PENDING DATABASE MIGRATIONS")
            print("=" * 70)
            print(f"\n  Current version: {current_rev}")
            print(f"  Latest version:  {head_rev}")
            print("\n  Run migrations with:")
            print("\n    alembic upgrade head")
            print("=" * 70 + "\n")
        else:
            print(f"Database schema is up to date (revision: {current_rev})")

    except Exception as e:
        # Don't fail startup on migration check errors
        print(f"Warning: Could not check migrations: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events:
    - Startup: Configure logging, initialize database, bootstrap admin
    - Shutdown: Close the mailer's HTTP client
    """
    # Startup
    app_config = get_app_config()
    log_config = app_config.application.logging
    configure_service_logging(
        level=log_config.level,
        log_to_file=log_config.log_to_file and settings.log_to_file,
        log_to_console=log_config.log_to_console,
    )

    print(f"Starting {settings.api_title} v{settings.api_version}")
    print(f"API documentation available at: http://localhost:{settings.port}/api/docs")

    init_db()
    app.state.app_db_connected = True

    _check_pending_migrations()

    await _setup_initial_super_admin()

    yield

    # Shutdown
    print("Shutting down CMIS Admin Console API...")
    await close_mailer()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## CMIS Admin Console API

Administration API for cooperative registration.

### Features
- **Users**: Directory, role assignments, deactivation
- **Applications**: Review queue, approval, rejection, information requests
- **Tenants**: County management
- **Notifications**: In-app inbox and status emails
- **Logging**: Full request attribution

### Authentication
Sign in at `/api/v1/auth/login` and pass the returned token:

```
Authorization: Bearer <token>
```
    """,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ConsoleError)
async def console_error_handler(request: Request, exc: ConsoleError) -> JSONResponse:
    """Convert service errors to the standard error body"""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            details=[{"message": str(exc)}] if settings.debug else None,
        ).model_dump(),
    )


# Health check endpoint
@app.get(
    "/health",
    tags=["System"],
    response_model=HealthResponse,
    summary="Health check",
    description="Check API health and database connectivity",
)
async def health_check(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Health check endpoint

    Returns the health status of the API including:
    - API version
    - App database connectivity
    - Whether status emails are enabled
    """
    try:
        db.execute(text("SELECT 1"))
        app_db_connected = True
    except SQLAlchemyError:
        app_db_connected = False

    return HealthResponse(
        status="healthy" if app_db_connected else "degraded",
        version=settings.api_version,
        app_db_connected=app_db_connected,
        email_enabled=get_mailer() is not None,
    )


# Root endpoint
@app.get("/", tags=["System"], summary="API Info")
async def root():
    """API root - returns basic API information"""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/api/docs",
        "health": "/health",
    }


# Include routers
app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["Authentication"])
app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["Users"])
app.include_router(
    applications_router,
    prefix=f"{settings.api_prefix}/applications",
    tags=["Applications"],
)
app.include_router(
    cooperative_types_router,
    prefix=f"{settings.api_prefix}/cooperative-types",
    tags=["Applications"],
)
app.include_router(tenants_router, prefix=f"{settings.api_prefix}/tenants", tags=["Tenants"])
app.include_router(
    notifications_router,
    prefix=f"{settings.api_prefix}/notifications",
    tags=["Notifications"],
)
app.include_router(documents_router, prefix=f"{settings.api_prefix}/documents", tags=["Documents"])


# Entry point for running directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cmis_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )

### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - FastAPI Dependencies -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
FastAPI Dependencies

Provides dependency injection for:
- Identity provider (per request, bound to the request session)
- Directory, registry and workflow services (per request)
- Notification dispatcher and status mailer
- Document storage

Tests override these through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from cmis_api.config import get_api_settings, get_app_config, get_project_root
from cmis_api.database import get_db, get_session_factory
from cmis_api.services import (
    ApplicationRegistry,
    DocumentStorage,
    IdentityProvider,
    NotificationDispatcher,
    StatusMailer,
    UserDirectory,
    WorkflowEngine,
)

# Service instances (created on first request, reused)
_mailer: StatusMailer | None = None
_storage: DocumentStorage | None = None


def get_mailer() -> StatusMailer | None:
    """
    Dependency that provides the status mailer.

    Returns None when notifications.email.enabled is false (or no webhook
    is configured), which limits notifications to in-app rows.
    """
    global _mailer

    email_config = get_app_config().notifications.email
    if not email_config.enabled or not email_config.webhook_url:
        return None

    if _mailer is None:
        _mailer = StatusMailer(webhook_url=email_config.webhook_url, timeout=email_config.timeout)
    return _mailer


async def close_mailer():
    """Close the mailer's HTTP client (call on shutdown)"""
    global _mailer

    if _mailer is not None:
        await _mailer.close()
        _mailer = None


def get_document_storage() -> DocumentStorage:
    """Dependency that provides the registration-documents bucket"""
    global _storage

    if _storage is None:
        settings = get_api_settings()
        storage_config = get_app_config().storage
        root = get_project_root() / storage_config.documents_dir
        _storage = DocumentStorage(
            root=root,
            secret_key=settings.secret_key,
            ttl_seconds=storage_config.signed_url_ttl_seconds,
            base_url=f"{settings.api_prefix}/documents",
        )
    return _storage


def get_identity_provider(db: Session = Depends(get_db)) -> IdentityProvider:
    settings = get_api_settings()
    return IdentityProvider(db, settings.secret_key, settings.token_ttl_minutes)


def get_notification_dispatcher(
    session_factory=Depends(get_session_factory),
    mailer: StatusMailer | None = Depends(get_mailer),
) -> NotificationDispatcher:
    return NotificationDispatcher(session_factory, mailer)


def get_user_directory(
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> UserDirectory:
    return UserDirectory(db, identity)


def get_application_registry(db: Session = Depends(get_db)) -> ApplicationRegistry:
    return ApplicationRegistry(db)


def get_workflow_engine(
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> WorkflowEngine:
    return WorkflowEngine(db, dispatcher, get_app_config().application.timezone)

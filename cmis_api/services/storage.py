### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Document Storage -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Document Storage

Registration documents live under a local directory (the
"registration-documents" bucket). Applications store paths relative to it.

Downloads go through time-limited links of the form
<base_url>/<token>, where the token is an HS256 JWT naming the path and
carrying an expiry. Links resolve through GET /api/v1/documents/{token}.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

import jwt

from cmis_api.errors import NotFoundError
from cmis_api.models import DOCUMENT_FIELDS, RegistrationApplication

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_TYPE = "document"


class DocumentStorage:
    """Local document bucket with signed download links"""

    def __init__(
        self,
        root: str | Path,
        secret_key: str,
        ttl_seconds: int = 3600,
        base_url: str = "/api/v1/documents",
    ):
        """
        Initialize storage.

        Args:
            root: Bucket directory (created if missing)
            secret_key: Key used to sign links
            ttl_seconds: Link lifetime
            base_url: Path prefix the download endpoint is mounted at
        """
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.secret_key = secret_key
        self.ttl_seconds = ttl_seconds
        self.base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> Path | None:
        """Absolute location of a stored path, or None if it escapes the bucket"""
        candidate = (self.root / path.lstrip("/")).resolve()
        try:
            candidate.relative_to(self.root)
        except ValueError:
            return None
        return candidate

    def exists(self, path: str) -> bool:
        location = self._resolve(path)
        return location is not None and location.is_file()

    def get_signed_url(self, path: str | None) -> str | None:
        """
        Sign a time-limited link for a stored document.

        Returns:
            The link, or None when the path is empty or the file is missing
        """
        if not path:
            return None
        if not self.exists(path):
            logger.warning("Cannot sign link, document missing: %s", path)
            return None

        token = jwt.encode(
            {
                "path": path,
                "exp": datetime.utcnow() + timedelta(seconds=self.ttl_seconds),
                "type": TOKEN_TYPE,
            },
            self.secret_key,
            algorithm=TOKEN_ALGORITHM,
        )
        return f"{self.base_url}/{token}"

    def resolve_token(self, token: str) -> Path:
        """
        Resolve a signed link token to the file on disk.

        Raises:
            NotFoundError: If the token is invalid/expired or the file is gone
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise NotFoundError("Document link has expired") from e
        except jwt.InvalidTokenError as e:
            raise NotFoundError("Invalid document link") from e

        path = payload.get("path")
        if payload.get("type") != TOKEN_TYPE or not path:
            raise NotFoundError("Invalid document link")

        location = self._resolve(path)
        if location is None or not location.is_file():
            raise NotFoundError("Document not found")
        return location

    def document_links(self, application: RegistrationApplication) -> list[dict]:
        """
        Describe an application's four documents.

        Each entry has field, label, path, uploaded and url. A document that is
        recorded but cannot be signed is reported with uploaded=True, url=None.
        """
        links = []
        for field, label in DOCUMENT_FIELDS.items():
            path = getattr(application, field)
            links.append(
                {
                    "field": field,
                    "label": label,
                    "path": path,
                    "uploaded": bool(path),
                    "url": self.get_signed_url(path),
                }
            )
        return links

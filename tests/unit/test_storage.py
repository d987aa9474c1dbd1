"""
Unit tests for document storage.

Tests signed download links, token resolution and document listings.
"""

import pytest

from cmis_api.config import get_api_settings
from cmis_api.errors import NotFoundError
from cmis_api.models import RegistrationApplication
from cmis_api.services import DocumentStorage


def _put(storage: DocumentStorage, path: str, content: bytes = b"%PDF-1.4") -> str:
    location = storage.root / path
    location.parent.mkdir(parents=True, exist_ok=True)
    location.write_bytes(content)
    return path


class TestSignedUrl:
    """Test DocumentStorage.get_signed_url."""

    def test_signs_existing_document(self, document_storage):
        path = _put(document_storage, "app-1/bylaws.pdf")

        url = document_storage.get_signed_url(path)

        assert url.startswith("/api/v1/documents/")

    def test_missing_document(self, document_storage):
        assert document_storage.get_signed_url("app-1/missing.pdf") is None

    @pytest.mark.parametrize("path", [None, ""])
    def test_empty_path(self, document_storage, path):
        assert document_storage.get_signed_url(path) is None

    def test_path_outside_bucket(self, document_storage, tmp_path):
        (tmp_path / "secret.txt").write_text("do not serve")

        assert document_storage.get_signed_url("../secret.txt") is None


class TestResolveToken:
    """Test DocumentStorage.resolve_token."""

    def test_round_trip(self, document_storage):
        path = _put(document_storage, "app-1/minutes.pdf", b"minutes")
        token = document_storage.get_signed_url(path).rsplit("/", 1)[-1]

        location = document_storage.resolve_token(token)

        assert location.read_bytes() == b"minutes"

    def test_invalid_token(self, document_storage):
        with pytest.raises(NotFoundError):
            document_storage.resolve_token("garbage")

    def test_other_key(self, document_storage, tmp_path):
        path = _put(document_storage, "app-1/bylaws.pdf")
        foreign = DocumentStorage(document_storage.root, "another-secret-key-of-sufficient-length")
        token = foreign.get_signed_url(path).rsplit("/", 1)[-1]

        with pytest.raises(NotFoundError):
            document_storage.resolve_token(token)

    def test_expired(self, tmp_path):
        storage = DocumentStorage(tmp_path / "bucket", get_api_settings().secret_key, ttl_seconds=-1)
        path = _put(storage, "app-1/bylaws.pdf")
        token = storage.get_signed_url(path).rsplit("/", 1)[-1]

        with pytest.raises(NotFoundError) as exc_info:
            storage.resolve_token(token)

        assert "expired" in exc_info.value.message

    def test_deleted_after_signing(self, document_storage):
        path = _put(document_storage, "app-1/bylaws.pdf")
        token = document_storage.get_signed_url(path).rsplit("/", 1)[-1]
        (document_storage.root / path).unlink()

        with pytest.raises(NotFoundError):
            document_storage.resolve_token(token)


class TestDocumentLinks:
    """Test DocumentStorage.document_links."""

    def test_lists_all_four(self, document_storage):
        _put(document_storage, "app-1/bylaws.pdf")
        application = RegistrationApplication(
            bylaws_url="app-1/bylaws.pdf",
            member_list_url="app-1/members.xlsx",  # recorded but never uploaded
            minutes_url=None,
            id_copies_url=None,
        )

        links = {link["field"]: link for link in document_storage.document_links(application)}

        assert set(links) == {"bylaws_url", "member_list_url", "minutes_url", "id_copies_url"}
        assert links["bylaws_url"]["uploaded"] is True
        assert links["bylaws_url"]["url"] is not None
        assert links["bylaws_url"]["path"] == "app-1/bylaws.pdf"
        assert links["member_list_url"]["uploaded"] is True
        assert links["member_list_url"]["url"] is None
        assert links["minutes_url"] == {
            "field": "minutes_url",
            "label": links["minutes_url"]["label"],
            "path": None,
            "uploaded": False,
            "url": None,
        }

### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Documents Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Signed document downloads

The signed token is the credential: links are handed out by the
application detail endpoint and expire after storage.signed_url_ttl_seconds.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from cmis_api.dependencies import get_document_storage
from cmis_api.services import DocumentStorage

router = APIRouter()


@router.get(
    "/{token}",
    summary="Download document",
    description="Download a registration document through a signed link",
    response_class=FileResponse,
)
async def download_document(
    token: str,
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Serve the document behind a signed link (404 if invalid or expired)"""
    location = storage.resolve_token(token)
    return FileResponse(str(location), filename=location.name)

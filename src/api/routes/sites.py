"""Site publishing routes.

- POST /sites: publish uploaded HTML/CSS/JS as a new site
- GET /sites: list the caller's sites
- GET /hosted/{subdomain}/{slug}: serve a published site's document
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from api.dependencies import get_site_publisher
from api.models import SiteResponse, UploadRequest
from api.security import get_current_user_required
from domain.model.errors import (
    NotFoundError,
    SlugSpaceExhaustedError,
    StorageError,
    ValidationError,
)
from domain.model.user import User
from services.site_publisher import SitePublisher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sites"])


@router.post("/sites", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
def publish_site(
    request: UploadRequest,
    current_user: User = Depends(get_current_user_required),
    publisher: SitePublisher = Depends(get_site_publisher),
):
    """Publish a site for the authenticated user.

    Declared sync so FastAPI runs it in the threadpool; the per-user lock
    inside SitePublisher blocks a worker thread, not the event loop.

    Raises:
        HTTPException: 400 for missing content, bad slug or malformed HTML,
            404 if the user vanished, 409 if no free slug is left,
            503 if the user store is unreadable or content or metadata could not be stored
    """
    try:
        result = publisher.publish(current_user.id, request.to_domain())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SlugSpaceExhaustedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageError as e:
        logger.error("Publish failed", extra={"userId": current_user.id, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return SiteResponse.from_result(result)


@router.get("/sites", response_model=list[SiteResponse])
def list_sites(
    current_user: User = Depends(get_current_user_required),
    publisher: SitePublisher = Depends(get_site_publisher),
):
    """List the authenticated user's sites, oldest first."""
    try:
        results = publisher.list_sites(current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return [SiteResponse.from_result(r) for r in results]


@router.get("/hosted/{subdomain}/{slug}", response_class=HTMLResponse)
def serve_site(subdomain: str, slug: str, publisher: SitePublisher = Depends(get_site_publisher)):
    """Serve a published site's HTML document."""
    document = publisher.get_document(subdomain, slug)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Site not found")
    return HTMLResponse(content=document)

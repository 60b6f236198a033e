"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import check_user_store, get_domains
from domain.model.domains import SupportedDomainSet

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "Ntandostore Multi-Domain Hosting"


@router.get("")
def health(
    domains: SupportedDomainSet = Depends(get_domains),
    store_ok: bool = Depends(check_user_store),
):
    """Health check endpoint with user store status."""
    health_status = {
        "status": "healthy",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "supported_domains": list(domains.domains),
        "primary_domain": domains.primary,
        "services": {},
    }

    if store_ok:
        health_status["services"]["user_store"] = {
            "status": "healthy",
            "message": "Connection successful"
        }
    else:
        health_status["services"]["user_store"] = {
            "status": "unhealthy",
            "message": "Connection failed or not configured"
        }
        health_status["status"] = "degraded"
        logger.warning("Health check: user store unavailable")

    status_code = status.HTTP_200_OK if store_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=health_status, status_code=status_code)

"""Supported domain listing."""

from fastapi import APIRouter, Depends

from api.dependencies import get_domains
from api.models import DomainsResponse
from domain.model.domains import SupportedDomainSet

router = APIRouter(prefix="/domains", tags=["domains"])


@router.get("", response_model=DomainsResponse)
async def list_domains(domains: SupportedDomainSet = Depends(get_domains)):
    return DomainsResponse(supported_domains=list(domains.domains), primary_domain=domains.primary)

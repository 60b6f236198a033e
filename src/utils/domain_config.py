"""Supported domain configuration, read once from the environment."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

from domain.model.domains import SupportedDomainSet

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SUPPORTED_DOMAINS = [
    'ntandostore',
    'ntando.app',
    'ntando.cloud',
    'ntando.zw',
    'ntl.cloud',
    'ntl.ai',
    'ntando.tech',
    'ntando.dev',
    'ntando.host',
    'ntando.site',
]
DEFAULT_PRIMARY_DOMAIN = 'ntandostore'


def parse_domain_list(raw: str | None) -> list[str]:
    """Split a comma-separated domain list, dropping blanks and repeats."""
    if not raw:
        return list(DEFAULT_SUPPORTED_DOMAINS)
    domains: list[str] = []
    for part in raw.split(','):
        domain = part.strip().lower()
        if domain and domain not in domains:
            domains.append(domain)
    return domains


@lru_cache(maxsize=1)
def get_domain_set() -> SupportedDomainSet:
    """Process-wide domain set from SUPPORTED_DOMAINS / PRIMARY_DOMAIN.

    Raises:
        ValueError: the list is empty or does not contain the primary domain
    """
    domains = parse_domain_list(os.getenv('SUPPORTED_DOMAINS'))
    primary = os.getenv('PRIMARY_DOMAIN', DEFAULT_PRIMARY_DOMAIN).strip().lower()
    domain_set = SupportedDomainSet.from_list(domains, primary)
    logger.info("Supported domains loaded", extra={"domains": domains, "primary": primary})
    return domain_set

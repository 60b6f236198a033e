"""Site publishing service — turns an upload into a stored, addressable Site.

Flow: validate → pick slug → compose document → (per-user lock:
resolve unique slug → write content → build URLs → append Site).

Content is written before the Site is appended, and removed again if the
append fails, so a user's site list never references missing content.
"""

import logging

from domain.model.document import SiteAssets, compose_document
from domain.model.domains import SupportedDomainSet, build_site_urls
from domain.model.errors import (
    MissingContentError,
    StorageError,
    UserNotFoundError,
)
from domain.model.site import PublishRequest, PublishResult, Site
from domain.model.slug import is_valid_slug, normalize_slug, resolve_unique_slug, validate_slug
from port.blob_store import BlobStore, site_document_key
from port.user_repository import UserRepository
from utils.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


def candidate_slug(request: PublishRequest) -> str:
    """Explicit slug if given (validated as-is), else one derived from the site name."""
    if request.site_slug:
        return validate_slug(request.site_slug)
    return normalize_slug(request.site_name)


def describe_site(site: Site, domains: SupportedDomainSet) -> PublishResult:
    """Pair a Site with its effective URL and its URL on the primary domain."""
    primary_url = site.urls.get(domains.primary, '')
    return PublishResult(
        site=site,
        url=site.url_for(site.domain, fallback=domains.primary) or primary_url,
        primary_url=primary_url,
        urls=dict(site.urls),
    )


class SitePublisher:
    def __init__(
        self,
        users: UserRepository,
        blobs: BlobStore,
        domains: SupportedDomainSet,
        locks: KeyedLock | None = None,
        max_slug_attempts: int | None = None,
    ):
        self.users = users
        self.blobs = blobs
        self.domains = domains
        self.locks = locks or KeyedLock()
        self.max_slug_attempts = max_slug_attempts

    def publish(self, user_id: str, request: PublishRequest) -> PublishResult:
        """Publish a new site for the user.

        Raises:
            MissingContentError: no HTML in the request
            InvalidSlugError: neither the explicit slug nor the site name yields a valid slug
            MalformedDocumentError: an asset's insertion marker is missing from the HTML
            UserNotFoundError: no user with user_id
            SlugSpaceExhaustedError: suffix attempts exhausted (only with max_slug_attempts)
            StorageError: the user store could not be read, or a content or
                metadata write failed; nothing was recorded
        """
        if not request.html:
            raise MissingContentError("HTML content is required")

        slug = candidate_slug(request)
        document = compose_document(SiteAssets(
            html=request.html,
            css=request.css,
            js=request.js,
            favicon=request.favicon,
        ))

        with self.locks.hold(user_id):
            user = self.users.get_by_id(user_id)
            if not user:
                raise UserNotFoundError(user_id)

            final_slug = resolve_unique_slug(slug, user.site_slugs, self.max_slug_attempts)
            key = site_document_key(user.subdomain, final_slug)

            if not self.blobs.write(key, document):
                logger.error("Site content write failed", extra={"userId": user_id, "slug": final_slug})
                raise StorageError("Failed to store site content")

            urls = build_site_urls(user.subdomain, final_slug, self.domains)
            domain = self.domains.effective_domain(request.preferred_domain)
            site = Site.create(request.site_name, final_slug, domain, urls)

            if not self.users.add_site(user.id, site):
                self._discard_content(key)
                raise StorageError("Failed to record site")

        logger.info("Site published", extra={
            "userId": user_id,
            "siteId": site.id,
            "slug": final_slug,
            "domain": domain,
        })
        return describe_site(site, self.domains)

    def list_sites(self, user_id: str) -> list[PublishResult]:
        """Return the user's sites in creation order with their resolved URLs.

        Raises:
            UserNotFoundError: no user with user_id
            StorageError: the user store could not be read
        """
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return [describe_site(site, self.domains) for site in user.sites]

    def get_document(self, subdomain: str, slug: str) -> str | None:
        """Return the stored HTML for a site, or None if there is none."""
        if not is_valid_slug(slug) or not subdomain or '/' in subdomain or subdomain.startswith('.'):
            return None
        return self.blobs.read(site_document_key(subdomain, slug))

    def _discard_content(self, key: str) -> None:
        if self.blobs.delete(key):
            logger.warning("Rolled back site content after failed metadata write", extra={"key": key})
        else:
            logger.error("Could not roll back site content", extra={"key": key})

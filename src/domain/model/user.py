from dataclasses import dataclass, field
from datetime import datetime

from domain.model.site import Site


@dataclass
class User:
    """Domain model representing a user and the sites they own."""
    id: str
    username: str
    email: str
    subdomain: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    sites: list[Site] = field(default_factory=list)

    @property
    def site_slugs(self) -> set[str]:
        return {site.slug for site in self.sites}

    def has_site_slug(self, slug: str) -> bool:
        return any(site.slug == slug for site in self.sites)

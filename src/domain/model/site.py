# domain/model/site.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

DEFAULT_SITE_NAME = 'Untitled Site'


@dataclass(frozen=True)
class PublishRequest:
    """Upload payload for a single publish call."""
    html: str | None
    css: str | None = None
    js: str | None = None
    favicon: str | None = None
    site_name: str | None = None
    site_slug: str | None = None
    preferred_domain: str | None = None


# ── Site Domain Model ────────────────────────────────────


@dataclass
class Site:
    """Domain model representing one published site of a user."""
    id: str
    name: str
    slug: str
    domain: str
    urls: dict[str, str]
    created_at: datetime
    updated_at: datetime
    visits: int = 0
    published: bool = True

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(name: str | None, slug: str, domain: str, urls: dict[str, str]) -> 'Site':
        """Create a freshly published Site with a generated ID."""
        now = datetime.now(timezone.utc)
        return Site(
            id=str(uuid.uuid4()),
            name=name or DEFAULT_SITE_NAME,
            slug=slug,
            domain=domain,
            urls=dict(urls),
            created_at=now,
            updated_at=now,
        )

    # ── queries ───────────────────────────────────────────

    def url_for(self, domain: str, fallback: str | None = None) -> str | None:
        return self.urls.get(domain) or (self.urls.get(fallback) if fallback else None)


# ── Publish Result ───────────────────────────────────────


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a successful publish."""
    site: Site
    url: str
    primary_url: str
    urls: dict[str, str] = field(default_factory=dict)

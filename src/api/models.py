"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.model.site import PublishRequest, PublishResult
from domain.model.user import User


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    username: str
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    """Request model for user login."""
    username: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user (no credential hash)."""
    id: str
    username: str
    email: str
    subdomain: str
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> 'UserResponse':
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            subdomain=user.subdomain,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: str
    user: UserResponse


class UploadRequest(BaseModel):
    """Request model for publishing a site."""
    model_config = ConfigDict(populate_by_name=True)

    html: Optional[str] = Field(None, description="Full HTML document")
    css: Optional[str] = Field(None, description="Stylesheet embedded before </head>")
    js: Optional[str] = Field(None, description="Script embedded before </body>")
    favicon: Optional[str] = Field(None, description="Base64-encoded .ico payload")
    site_name: Optional[str] = Field(None, alias="siteName", description="Display name; slug source when site_slug is absent")
    site_slug: Optional[str] = Field(None, alias="siteSlug", description="Explicit slug, 3-63 letters, digits or hyphens")
    preferred_domain: Optional[str] = Field(None, alias="preferredDomain", description="Domain used for the returned url")

    def to_domain(self) -> PublishRequest:
        return PublishRequest(**self.model_dump())


class SiteResponse(BaseModel):
    """Response model for a published site."""
    id: str
    name: str
    slug: str
    domain: str
    url: str
    primary_url: str
    urls: dict[str, str]
    created_at: datetime
    updated_at: datetime
    visits: int
    published: bool

    @classmethod
    def from_result(cls, result: PublishResult) -> 'SiteResponse':
        site = result.site
        return cls(
            id=site.id,
            name=site.name,
            slug=site.slug,
            domain=site.domain,
            url=result.url,
            primary_url=result.primary_url,
            urls=result.urls,
            created_at=site.created_at,
            updated_at=site.updated_at,
            visits=site.visits,
            published=site.published,
        )


class DomainsResponse(BaseModel):
    """Response model for the supported domain list."""
    supported_domains: list[str]
    primary_domain: str

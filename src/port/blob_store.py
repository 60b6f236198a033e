"""Port definition for BlobStore (published site content)."""

from typing import Protocol


def site_document_key(subdomain: str, slug: str) -> str:
    """Storage key of a site's index document."""
    return f"{subdomain}/{slug}/index.html"


class BlobStore(Protocol):
    def write(self, key: str, content: str) -> bool: ...
    def read(self, key: str) -> str | None: ...
    def delete(self, key: str) -> bool: ...

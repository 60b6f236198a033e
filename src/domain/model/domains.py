"""Supported domain configuration and per-site URL derivation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SupportedDomainSet:
    """Ordered list of serving domains plus the designated primary domain."""
    domains: tuple[str, ...]
    primary: str

    def __post_init__(self):
        if not self.domains:
            raise ValueError("At least one supported domain is required")
        if self.primary not in self.domains:
            raise ValueError(
                f"Primary domain '{self.primary}' is not in supported domains"
            )

    @classmethod
    def from_list(cls, domains: list[str], primary: str) -> 'SupportedDomainSet':
        return cls(domains=tuple(domains), primary=primary)

    def __contains__(self, domain: object) -> bool:
        return domain in self.domains

    def effective_domain(self, preferred: str | None) -> str:
        """Return preferred if it is supported, else the primary domain."""
        if preferred and preferred in self.domains:
            return preferred
        return self.primary


def build_site_urls(
    subdomain: str,
    slug: str,
    domains: SupportedDomainSet,
) -> dict[str, str]:
    """Map every supported domain to https://{subdomain}-{slug}.{domain}."""
    return {
        domain: f"https://{subdomain}-{slug}.{domain}"
        for domain in domains.domains
    }

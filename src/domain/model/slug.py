"""Site slug rules: normalization, validation and per-user uniqueness."""

import re
from collections.abc import Collection

from domain.model.errors import InvalidSlugError, SlugSpaceExhaustedError

FALLBACK_SLUG = 'site'
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 63

_SLUG_PATTERN = re.compile(r'^[a-zA-Z0-9-]+$')
_NON_ALNUM_RUN = re.compile(r'[^a-z0-9]+')


def is_valid_slug(slug: str | None) -> bool:
    """Return True if slug is 3-63 letters, digits or hyphens, not hyphen-bounded."""
    if not slug or not _SLUG_PATTERN.match(slug):
        return False
    if not SLUG_MIN_LENGTH <= len(slug) <= SLUG_MAX_LENGTH:
        return False
    return not (slug.startswith('-') or slug.endswith('-'))


def validate_slug(slug: str | None) -> str:
    """Return slug unchanged, or raise InvalidSlugError."""
    if not is_valid_slug(slug):
        raise InvalidSlugError(slug)
    return slug


def normalize_slug(raw_name: str | None) -> str:
    """Turn a free-text site name into a valid slug.

    Lowercases, collapses every run of characters outside [a-z0-9] into a
    single hyphen and strips hyphens at both ends. Absent or empty names
    fall back to "site".

    Raises:
        InvalidSlugError: the normalized name is empty, too short or too long
    """
    if not raw_name:
        return FALLBACK_SLUG

    slug = _NON_ALNUM_RUN.sub('-', raw_name.lower()).strip('-')
    return validate_slug(slug)


def resolve_unique_slug(
    candidate: str,
    existing: Collection[str],
    max_attempts: int | None = None,
) -> str:
    """Return candidate, or candidate-N with the lowest N not in existing.

    The suffix always grows from the base candidate ("test-1", "test-2"),
    never stacks ("test-1-1"). When base-N would exceed SLUG_MAX_LENGTH the
    base is cut short so the suffixed slug still fits.

    Raises:
        SlugSpaceExhaustedError: max_attempts suffixes were all taken
    """
    if candidate not in existing:
        return candidate

    counter = 1
    while True:
        if max_attempts is not None and counter > max_attempts:
            raise SlugSpaceExhaustedError(
                f"No free slug for '{candidate}' after {max_attempts} attempts"
            )
        slug = _with_suffix(candidate, counter)
        if slug not in existing:
            return slug
        counter += 1


def _with_suffix(base: str, counter: int) -> str:
    suffix = f"-{counter}"
    if len(base) + len(suffix) > SLUG_MAX_LENGTH:
        base = base[:SLUG_MAX_LENGTH - len(suffix)].rstrip('-')
    return base + suffix

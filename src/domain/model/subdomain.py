"""Username rules and word-based subdomain identity generation."""

import random
import re

ADJECTIVES = (
    'quick', 'bright', 'clever', 'swift', 'smart',
    'happy', 'lucky', 'sunny', 'cool', 'warm',
)
NOUNS = (
    'site', 'web', 'page', 'space', 'zone',
    'hub', 'spot', 'place', 'world', 'realm',
)
MAX_SUFFIX_NUMBER = 9999

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
RESERVED_USERNAMES = frozenset({
    'www', 'api', 'admin', 'dashboard', 'mail', 'ftp',
    'cdn', 'static', 'assets', 'hosted', 'users',
})

_USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')


def is_valid_username(username: str | None) -> bool:
    if not username or not _USERNAME_PATTERN.match(username):
        return False
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return False
    if username[0] in '-_' or username[-1] in '-_':
        return False
    return username.lower() not in RESERVED_USERNAMES


class SubdomainGenerator:
    """Builds "{username}-{adjective}{noun}{number}" identities.

    Not unique by construction; callers check the result against existing
    users and ask again on collision. Pass a seeded ``random.Random`` for
    reproducible output.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def generate(self, username: str) -> str:
        adjective = self._rng.choice(ADJECTIVES)
        noun = self._rng.choice(NOUNS)
        number = self._rng.randint(1, MAX_SUFFIX_NUMBER)
        return f"{username}-{adjective}{noun}{number}"

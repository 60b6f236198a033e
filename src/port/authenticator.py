"""Port definition for Authenticator (token issuance and verification)."""

from typing import Protocol


class Authenticator(Protocol):
    def issue_token(self, user_id: str) -> str: ...
    def verify(self, token: str) -> str | None: ...

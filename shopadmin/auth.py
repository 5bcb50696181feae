"""Admin credential checks used by the route layer."""

from __future__ import annotations

import hmac
from typing import Optional, Protocol


class CredentialChecker(Protocol):
    def verify(self, supplied: Optional[str]) -> bool:
        ...


class ApiKeyChecker:
    """Compare a supplied key against the configured admin secret.

    An empty secret disables admin access entirely rather than accepting an
    empty key.
    """

    def __init__(self, secret: str) -> None:
        self._secret = (secret or "").strip()

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def verify(self, supplied: Optional[str]) -> bool:
        if not self._secret or not supplied:
            return False
        return hmac.compare_digest(supplied.strip().encode("utf-8"), self._secret.encode("utf-8"))

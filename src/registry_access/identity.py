"""Caller identity lookup for ``ls-packages`` without an entity."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from .client import RegistryClient
from .exceptions import AuthenticationRequiredError

logger = logging.getLogger(__name__)


@runtime_checkable
class IdentityResolver(Protocol):
    """Produces the entity string of whoever is running the command."""

    def get_self_identity(self) -> str: ...


class RegistryIdentity:
    """
    Identity from configuration, falling back to the registry's whoami.

    Args:
        client: Registry client used for the whoami lookup
        username: Configured username; skips the lookup when set
    """

    def __init__(self, client: RegistryClient, username: Optional[str] = None):
        self.client = client
        self.username = username

    def get_self_identity(self) -> str:
        if self.username:
            return self.username

        username = self.client.whoami()
        if not username:
            raise AuthenticationRequiredError(
                context={"registry": getattr(self.client, "registry", "unknown")}
            )
        logger.debug(f"Registry identifies caller as {username}")
        return username

"""
Registry access API client.

Talks to the package-access endpoints of an npm-compatible registry.
The router only depends on the ``RegistryClient`` protocol, so tests and
embedders can supply any object with the same methods.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, runtime_checkable
from urllib.parse import quote

import requests

from .exceptions import RegistryError

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = "https://registry.npmjs.org"

# Registry wire values -> permission levels used on the command line
PERMISSION_NAMES = {
    "read": "read-only",
    "write": "read-write",
}


@runtime_checkable
class RegistryClient(Protocol):
    """Operations the access router delegates to."""

    def set_public(self, package: str, registry: Optional[str] = None) -> Any: ...

    def set_restricted(self, package: str, registry: Optional[str] = None) -> Any: ...

    def grant(self, package: str, team: str, permission: str) -> Any: ...

    def revoke(self, package: str, team: str) -> Any: ...

    def tfa_required(self, package: str) -> Any: ...

    def tfa_not_required(self, package: str) -> Any: ...

    def list_packages(self, entity: str) -> Dict[str, str]: ...

    def list_collaborators(self, package: str, user: Optional[str] = None) -> Dict[str, str]: ...

    def whoami(self) -> Optional[str]: ...


def escape_package_name(name: str) -> str:
    """Escape a package name for use as a single URL path segment.

    Scoped names keep their ``@`` and encode the slash: ``@scope%2fname``.
    """
    return quote(name, safe="@").replace("%2F", "%2f")


def split_team(team: str) -> tuple[str, str]:
    """Split ``scope:team`` into its parts, dropping a leading ``@``."""
    scope, _, name = team.partition(":")
    return scope.lstrip("@"), name


def translate_permissions(data: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    """Map registry ``read``/``write`` values to ``read-only``/``read-write``."""
    if data is None:
        return None
    return {key: PERMISSION_NAMES.get(value, value) for key, value in data.items()}


class HttpRegistryClient:
    """
    Client for the registry package-access API.

    Example::

        client = HttpRegistryClient("https://registry.npmjs.org", token="...")
        client.set_public("@myorg/widgets")
        client.grant("@myorg/widgets", "myorg:developers", "read-write")
        print(client.list_packages("myorg:developers"))
    """

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "User-Agent": "registry-access",
    }

    def __init__(
        self,
        registry: str = DEFAULT_REGISTRY,
        token: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            registry: Base URL of the registry
            token: Bearer token for authenticated endpoints
            timeout: Request timeout in seconds
        """
        self.registry = registry.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._session = None

    def _get_session(self):
        """Get or create requests session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.DEFAULT_HEADERS)
            if self.token:
                self._session.headers["Authorization"] = f"Bearer {self.token}"
        return self._session

    def _request(
        self,
        method: str,
        path: str,
        registry: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        base = (registry or self.registry).rstrip("/")
        url = f"{base}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self._get_session().request(
                method,
                url,
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise RegistryError(
                f"Could not reach registry: {e}",
                context={"url": url},
            ) from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"{method} {url} returned {response.status_code}")
            raise RegistryError(
                f"Registry request failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
                context={"url": url, "method": method},
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _set_access(self, package: str, body: Dict[str, Any], registry: Optional[str]) -> Any:
        path = f"/-/package/{escape_package_name(package)}/access"
        return self._request("POST", path, registry=registry, json=body)

    def set_public(self, package: str, registry: Optional[str] = None) -> Any:
        """Make a scoped package publicly visible."""
        return self._set_access(package, {"access": "public"}, registry)

    def set_restricted(self, package: str, registry: Optional[str] = None) -> Any:
        """Restrict a scoped package to its owners."""
        return self._set_access(package, {"access": "restricted"}, registry)

    def tfa_required(self, package: str) -> Any:
        return self._set_access(package, {"publish_requires_tfa": True}, None)

    def tfa_not_required(self, package: str) -> Any:
        return self._set_access(package, {"publish_requires_tfa": False}, None)

    def grant(self, package: str, team: str, permission: str) -> Any:
        """Give ``team`` the ``permission`` level on ``package``."""
        scope, name = split_team(team)
        path = f"/-/team/{quote(scope, safe='')}/{quote(name, safe='')}/package"
        return self._request("PUT", path, json={"package": package, "permissions": permission})

    def revoke(self, package: str, team: str) -> Any:
        """Remove ``team``'s access to ``package``."""
        scope, name = split_team(team)
        path = f"/-/team/{quote(scope, safe='')}/{quote(name, safe='')}/package"
        return self._request("DELETE", path, json={"package": package})

    def list_packages(self, entity: str) -> Dict[str, str]:
        """
        List packages a user, org, or team has access to.

        Entities containing ``:`` are teams. Anything else is tried as an
        org first and then as a user if the registry has no such org.

        Returns:
            Mapping of package name to ``read-only`` / ``read-write``
        """
        if ":" in entity:
            scope, name = split_team(entity)
            path = f"/-/team/{quote(scope, safe='')}/{quote(name, safe='')}/package"
            return translate_permissions(self._request("GET", path, params={"format": "cli"}))

        entity = entity.lstrip("@")
        try:
            data = self._request(
                "GET", f"/-/org/{quote(entity, safe='')}/package", params={"format": "cli"}
            )
        except RegistryError as e:
            if e.status_code != 404:
                raise
            logger.debug(f"No org named {entity}, retrying as user")
            data = self._request(
                "GET", f"/-/user/{quote(entity, safe='')}/package", params={"format": "cli"}
            )
        return translate_permissions(data)

    def list_collaborators(self, package: str, user: Optional[str] = None) -> Dict[str, str]:
        """
        List users with access to ``package``.

        Args:
            package: Package name
            user: Restrict the listing to this user

        Returns:
            Mapping of user name to ``read-only`` / ``read-write``
        """
        params = {"format": "cli"}
        if user:
            params["user"] = user
        path = f"/-/package/{escape_package_name(package)}/collaborators"
        return translate_permissions(self._request("GET", path, params=params))

    def whoami(self) -> Optional[str]:
        """Return the username the configured token belongs to."""
        data = self._request("GET", "/-/whoami")
        if isinstance(data, dict):
            return data.get("username")
        return None

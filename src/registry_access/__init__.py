"""
registry-access: manage access to packages published on a registry.

Modules:
    access: Subcommand parsing, validation, routing and completion
    client: HTTP client for the registry package-access API
    manifest: Default package name from package.json
    identity: Caller identity for listings
    output: Output sinks for listing results
    config: TOML configuration loading
    exceptions: Error hierarchy

Quick Start::

    from registry_access import AccessRouter, HttpRegistryClient

    router = AccessRouter(HttpRegistryClient(token="..."))
    router.dispatch(["grant", "read-write", "myorg:developers", "@myorg/widgets"])
"""

__version__ = "0.1.0"

from registry_access.access import (
    AccessOptions,
    AccessRouter,
    PermissionLevel,
    Subcommand,
    complete,
    parse_request,
    validate_team_ref,
)
from registry_access.client import HttpRegistryClient, RegistryClient
from registry_access.exceptions import RegistryAccessError, UsageError

__all__ = [
    "__version__",
    "AccessOptions",
    "AccessRouter",
    "PermissionLevel",
    "Subcommand",
    "complete",
    "parse_request",
    "validate_team_ref",
    "HttpRegistryClient",
    "RegistryClient",
    "RegistryAccessError",
    "UsageError",
]

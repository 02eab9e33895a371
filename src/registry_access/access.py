"""
Access subcommand router.

Turns ``access`` argument vectors into exactly one registry-client call,
or exactly one structured error when the arguments don't validate.

Usage::

    from registry_access.access import AccessOptions, AccessRouter

    router = AccessRouter(client)
    router.dispatch(["grant", "read-only", "myorg:devs", "@myorg/widgets"])
    router.dispatch(["public"], AccessOptions(prefix=Path("path/to/project")))

Each subcommand is parsed into a typed request before anything touches the
registry, so every argument error surfaces ahead of the first network call.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Iterator, Optional, Sequence, Union

from .client import DEFAULT_REGISTRY, RegistryClient
from .exceptions import (
    CompletionUnrecognizedError,
    PermissionInvalidError,
    ScopeRequiredError,
    SubcommandMissingError,
    SubcommandNotImplementedError,
    SubcommandUnrecognizedError,
    TeamMalformedError,
    TeamMissingError,
)
from .identity import IdentityResolver, RegistryIdentity
from .manifest import ManifestResolver, PackageJsonResolver
from .output import JsonOutput, OutputSink

logger = logging.getLogger(__name__)

SCOPED_PACKAGE = re.compile(r"^@[^/]+/.*$")
TEAM_REF = re.compile(r"^@?([^@:]+):(.+)$")


class Subcommand(str, Enum):
    """Access subcommands."""

    PUBLIC = "public"
    RESTRICTED = "restricted"
    GRANT = "grant"
    REVOKE = "revoke"
    TFA_REQUIRED = "2fa-required"
    TFA_NOT_REQUIRED = "2fa-not-required"
    LS_PACKAGES = "ls-packages"
    LS_COLLABORATORS = "ls-collaborators"
    EDIT = "edit"


# Order offered by shell completion
COMPLETION_ORDER = (
    Subcommand.PUBLIC,
    Subcommand.RESTRICTED,
    Subcommand.GRANT,
    Subcommand.REVOKE,
    Subcommand.LS_PACKAGES,
    Subcommand.LS_COLLABORATORS,
    Subcommand.EDIT,
    Subcommand.TFA_REQUIRED,
    Subcommand.TFA_NOT_REQUIRED,
)


class PermissionLevel(str, Enum):
    """Team permission levels accepted by ``grant``."""

    READ_ONLY = "read-only"
    READ_WRITE = "read-write"


@dataclass(frozen=True)
class AccessOptions:
    """Per-call settings passed explicitly into ``dispatch``.

    Attributes:
        registry: Registry endpoint forwarded to visibility changes
        prefix: Directory whose manifest supplies the default package
    """

    registry: str = DEFAULT_REGISTRY
    prefix: Path = field(default_factory=Path.cwd)


@dataclass(frozen=True)
class PackageRequest:
    """Subcommands that take only an optional package."""

    subcommand: Subcommand
    package: Optional[str] = None


@dataclass(frozen=True)
class GrantRequest:
    subcommand: ClassVar[Subcommand] = Subcommand.GRANT

    permission: PermissionLevel
    team: str
    package: Optional[str] = None


@dataclass(frozen=True)
class RevokeRequest:
    subcommand: ClassVar[Subcommand] = Subcommand.REVOKE

    team: str
    package: Optional[str] = None


@dataclass(frozen=True)
class ListPackagesRequest:
    subcommand: ClassVar[Subcommand] = Subcommand.LS_PACKAGES

    entity: Optional[str] = None


@dataclass(frozen=True)
class ListCollaboratorsRequest:
    subcommand: ClassVar[Subcommand] = Subcommand.LS_COLLABORATORS

    package: Optional[str] = None
    user: Optional[str] = None


AccessRequest = Union[
    PackageRequest,
    GrantRequest,
    RevokeRequest,
    ListPackagesRequest,
    ListCollaboratorsRequest,
]


def is_scoped(package: str) -> bool:
    """Return True for ``@scope/name`` references."""
    return bool(SCOPED_PACKAGE.match(package))


def validate_permission(value: Optional[str]) -> PermissionLevel:
    """Parse a ``grant`` permission token."""
    try:
        return PermissionLevel(value)
    except ValueError:
        raise PermissionInvalidError(value) from None


def validate_team_ref(value: Optional[str], ordinal: str) -> str:
    """
    Check that ``value`` is a ``scope:team`` reference.

    Args:
        value: Team token, or None when the argument was not supplied
        ordinal: Position label for the error message ("First", "Second")

    Returns:
        The team reference, unchanged

    Raises:
        TeamMissingError: ``value`` is None
        TeamMalformedError: ``value`` is not ``scope:team`` shaped
    """
    if value is None:
        raise TeamMissingError()
    if not TEAM_REF.match(value):
        raise TeamMalformedError(value, ordinal)
    return value


def parse_request(argv: Sequence[Optional[str]]) -> AccessRequest:
    """
    Parse an access argument vector into a typed request.

    ``None`` entries stand for arguments that were not supplied, which is
    different from an empty string.

    Raises:
        SubcommandMissingError: ``argv`` is empty or its first entry is blank
        SubcommandUnrecognizedError: The first entry is not a subcommand
        UsageError: Subcommand-specific validation failed
    """
    token = argv[0] if argv else None
    if not token:
        raise SubcommandMissingError()

    try:
        subcommand = Subcommand(token)
    except ValueError:
        raise SubcommandUnrecognizedError(token) from None

    args = list(argv[1:])

    def arg(index: int) -> Optional[str]:
        return args[index] if index < len(args) else None

    if subcommand is Subcommand.GRANT:
        # Permission is checked before the team
        permission = validate_permission(arg(0))
        team = validate_team_ref(arg(1), "Second")
        return GrantRequest(permission=permission, team=team, package=arg(2))

    elif subcommand is Subcommand.REVOKE:
        team = validate_team_ref(arg(0), "First")
        return RevokeRequest(team=team, package=arg(1))

    elif subcommand is Subcommand.LS_PACKAGES:
        return ListPackagesRequest(entity=arg(0))

    elif subcommand is Subcommand.LS_COLLABORATORS:
        return ListCollaboratorsRequest(package=arg(0), user=arg(1))

    return PackageRequest(subcommand=subcommand, package=arg(0))


def complete(remaining_args: Sequence[str]) -> Iterator[str]:
    """
    Completion candidates for a partial ``access`` command line.

    Args:
        remaining_args: Every word typed so far, including the program and
            command words (e.g. ``["npm", "access", "grant"]``)

    Returns:
        Lazy iterator of candidate tokens

    Raises:
        CompletionUnrecognizedError: The subcommand token is unknown
    """
    words = list(remaining_args[2:])
    if not words:
        return (subcommand.value for subcommand in COMPLETION_ORDER)

    try:
        subcommand = Subcommand(words[0])
    except ValueError:
        raise CompletionUnrecognizedError(words[0]) from None

    if subcommand is Subcommand.GRANT and len(words) == 1:
        return (level.value for level in PermissionLevel)
    return iter(())


class AccessRouter:
    """
    Validate access subcommands and route them to a registry client.

    The router keeps no state between calls; everything a call needs comes
    from its arguments or from the injected collaborators.

    Args:
        client: Registry client performing the access operations
        manifest: Resolver for the default package (package.json by default)
        identity: Resolver for the caller's own entity (whoami by default)
        output: Sink for listing results (indented JSON on stdout by default)
    """

    def __init__(
        self,
        client: RegistryClient,
        manifest: Optional[ManifestResolver] = None,
        identity: Optional[IdentityResolver] = None,
        output: Optional[OutputSink] = None,
    ):
        self.client = client
        self.manifest = manifest if manifest is not None else PackageJsonResolver()
        self.identity = identity if identity is not None else RegistryIdentity(client)
        self.output = output if output is not None else JsonOutput()

    def resolve_package(
        self,
        package: Optional[str],
        options: AccessOptions,
        require_scope: bool = False,
    ) -> str:
        """
        Resolve the package a subcommand acts on.

        A non-blank explicit package is used verbatim; otherwise the name
        comes from the manifest in ``options.prefix``.

        Raises:
            PackageUnresolvableError: No package and no manifest
            ManifestParseError: The manifest is malformed
            ScopeRequiredError: ``require_scope`` and the package is unscoped
        """
        if package is None or not package.strip():
            package = self.manifest.resolve_package_name(options.prefix)

        if require_scope and not is_scoped(package):
            raise ScopeRequiredError(package)
        return package

    def dispatch(
        self,
        argv: Sequence[Optional[str]],
        options: Optional[AccessOptions] = None,
    ) -> Any:
        """
        Run one access subcommand.

        Args:
            argv: Subcommand name followed by its positional arguments
            options: Registry endpoint and project directory for this call

        Returns:
            The listing for ``ls-packages`` / ``ls-collaborators`` (also sent
            to the output sink), None for every other subcommand

        Raises:
            RegistryAccessError: Validation or resolution failed. Errors from
                the registry client propagate unchanged.
        """
        if options is None:
            options = AccessOptions()

        request = parse_request(argv)
        subcommand = request.subcommand
        logger.debug(f"Dispatching access {subcommand.value}: {request}")

        if subcommand is Subcommand.PUBLIC:
            package = self.resolve_package(request.package, options, require_scope=True)
            self.client.set_public(package, options.registry)

        elif subcommand is Subcommand.RESTRICTED:
            package = self.resolve_package(request.package, options, require_scope=True)
            self.client.set_restricted(package, options.registry)

        elif subcommand is Subcommand.GRANT:
            package = self.resolve_package(request.package, options)
            self.client.grant(package, request.team, request.permission.value)

        elif subcommand is Subcommand.REVOKE:
            package = self.resolve_package(request.package, options)
            self.client.revoke(package, request.team)

        elif subcommand is Subcommand.TFA_REQUIRED:
            package = self.resolve_package(request.package, options)
            self.client.tfa_required(package)

        elif subcommand is Subcommand.TFA_NOT_REQUIRED:
            package = self.resolve_package(request.package, options)
            self.client.tfa_not_required(package)

        elif subcommand is Subcommand.LS_PACKAGES:
            entity = request.entity or self.identity.get_self_identity()
            packages = self.client.list_packages(entity)
            self.output(packages)
            return packages

        elif subcommand is Subcommand.LS_COLLABORATORS:
            package = self.resolve_package(request.package, options)
            if request.user:
                collaborators = self.client.list_collaborators(package, request.user)
            else:
                collaborators = self.client.list_collaborators(package)
            self.output(collaborators)
            return collaborators

        elif subcommand is Subcommand.EDIT:
            raise SubcommandNotImplementedError(subcommand.value)

        return None

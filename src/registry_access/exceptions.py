"""
Custom exception hierarchy for registry-access.

Every failure the access router can report maps to one class here, so
callers can tell argument problems apart from manifest or registry
problems without parsing message text. All exceptions include:
- Context information (package, manifest path, offending token, etc.)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Example::

    from registry_access.exceptions import ScopeRequiredError, TeamMalformedError

    try:
        router.dispatch(["public"], options)
    except ScopeRequiredError as e:
        print(e.package)

Usage errors (``UsageError`` and subclasses) carry the ``Usage:`` prefix and
the full subcommand summary, matching what a user sees on the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

ACCESS_USAGE = """registry-access access public [<package>]
registry-access access restricted [<package>]
registry-access access grant <read-only|read-write> <scope:team> [<package>]
registry-access access revoke <scope:team> [<package>]
registry-access access 2fa-required [<package>]
registry-access access 2fa-not-required [<package>]
registry-access access ls-packages [<user>|<scope>|<scope:team>]
registry-access access ls-collaborators [<package> [<user>]]
registry-access access edit [<package>]"""


class RegistryAccessError(Exception):
    """
    Base exception for all registry-access errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (package, file, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class UsageError(RegistryAccessError):
    """
    Command-line arguments did not match what the subcommand expects.

    The message is ``Usage: <detail>`` followed by the usage summary.

    Attributes:
        detail: The one-line description of what was wrong
    """

    def __init__(
        self,
        detail: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        usage: str = ACCESS_USAGE,
    ):
        self.detail = detail
        self.usage = usage
        super().__init__(f"Usage: {detail}\n\n{usage}", context, suggestions)


class SubcommandMissingError(UsageError):
    """No subcommand was given."""

    def __init__(self):
        super().__init__("Subcommand is required.")


class SubcommandUnrecognizedError(UsageError):
    """
    The subcommand is not one of the known access subcommands.

    Attributes:
        subcommand: The offending token
    """

    def __init__(self, subcommand: str):
        self.subcommand = subcommand
        super().__init__(f"{subcommand} is not a recognized subcommand.")


class ScopeRequiredError(UsageError):
    """
    Visibility changes were requested for an unscoped package.

    Attributes:
        package: The resolved, unscoped package name
    """

    def __init__(self, package: str):
        self.package = package
        super().__init__(
            "This command is only available for scoped packages.",
            context={"package": package},
        )


class PermissionInvalidError(UsageError):
    """
    ``grant`` was given something other than a known permission level.

    Attributes:
        value: The rejected permission token (None when absent)
    """

    def __init__(self, value: Optional[str]):
        self.value = value
        super().__init__("First argument must be either `read-only` or `read-write`.")


class TeamMissingError(UsageError):
    """The ``<scope:team>`` argument was not supplied."""

    def __init__(self):
        super().__init__("`<scope:team>` argument is required.")


class TeamMalformedError(UsageError):
    """
    A team argument was supplied but is not shaped like ``scope:team``.

    Attributes:
        value: The rejected team token
        ordinal: Positional label used in the message ("First", "Second")
    """

    def __init__(self, value: str, ordinal: str):
        self.value = value
        self.ordinal = ordinal
        super().__init__(
            f"{ordinal} argument used incorrect format.\nExample: @example:developers"
        )


class SubcommandNotImplementedError(RegistryAccessError):
    """
    The subcommand exists but has no implementation.

    Attributes:
        subcommand: Name of the unimplemented subcommand
    """

    def __init__(self, subcommand: str):
        self.subcommand = subcommand
        super().__init__(f"{subcommand} subcommand is not implemented yet")


class PackageUnresolvableError(RegistryAccessError):
    """
    No package was passed and none could be read from a manifest.

    Example::

        raise PackageUnresolvableError(
            context={"manifest": "/work/package.json"},
        )
    """

    def __init__(
        self,
        message: str = "no package name passed and no manifest found",
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        if suggestions is None:
            suggestions = [
                "Pass the package name explicitly",
                "Run the command from a directory containing package.json",
            ]
        super().__init__(message, context, suggestions)


class ParseError(RegistryAccessError):
    """
    File parsing failed.

    Raised when a file exists but cannot be decoded due to syntax errors.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        # Build context from convenience parameters
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        if column is not None and "column" not in ctx:
            ctx["column"] = column

        super().__init__(message, ctx, suggestions)


class ManifestParseError(ParseError):
    """
    The manifest exists but is not valid JSON.

    Attributes:
        error: The underlying decoder exception
    """

    def __init__(
        self,
        error: Exception,
        file_path: Optional[Union[str, Path]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.error = error
        super().__init__(
            f"Failed to parse manifest: {type(error).__name__}: {error}",
            file_path=file_path,
            line=line,
            column=column,
            suggestions=["Check the manifest for trailing commas or unclosed braces"],
        )


class CompletionUnrecognizedError(RegistryAccessError):
    """
    Completion was requested after an unknown subcommand token.

    Attributes:
        token: The unrecognized token
    """

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"{token} not recognized")


class RegistryError(RegistryAccessError):
    """
    The registry answered with an error status or could not be reached.

    Attributes:
        status_code: HTTP status, or None when no response was received
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.status_code = status_code
        ctx = context or {}
        if status_code is not None and "status" not in ctx:
            ctx["status"] = status_code
        super().__init__(message, ctx, suggestions)


class AuthenticationRequiredError(RegistryAccessError):
    """The caller's identity could not be determined."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            "This command requires you to be logged in.",
            context=context,
            suggestions=[
                "Set registry.token in your registry-access config",
                "Or set registry.username to list packages without a whoami lookup",
            ],
        )


class ConfigurationError(RegistryAccessError):
    """
    Configuration or settings error.

    Raised when configuration is invalid, missing, or incompatible.
    """

    pass


__all__ = [
    "ACCESS_USAGE",
    "RegistryAccessError",
    "UsageError",
    "SubcommandMissingError",
    "SubcommandUnrecognizedError",
    "ScopeRequiredError",
    "PermissionInvalidError",
    "TeamMissingError",
    "TeamMalformedError",
    "SubcommandNotImplementedError",
    "PackageUnresolvableError",
    "ParseError",
    "ManifestParseError",
    "CompletionUnrecognizedError",
    "RegistryError",
    "AuthenticationRequiredError",
    "ConfigurationError",
]

"""Tests for access argument parsing, validators and completion."""

import types

import pytest

from registry_access.access import (
    COMPLETION_ORDER,
    GrantRequest,
    ListCollaboratorsRequest,
    ListPackagesRequest,
    PackageRequest,
    PermissionLevel,
    RevokeRequest,
    Subcommand,
    complete,
    is_scoped,
    parse_request,
    validate_permission,
    validate_team_ref,
)
from registry_access.exceptions import (
    CompletionUnrecognizedError,
    PermissionInvalidError,
    TeamMalformedError,
    TeamMissingError,
)


class TestParseRequest:
    """Tests for parse_request()."""

    def test_grant_request(self):
        request = parse_request(["grant", "read-only", "myorg:myteam", "@scoped/another"])

        assert request == GrantRequest(
            permission=PermissionLevel.READ_ONLY,
            team="myorg:myteam",
            package="@scoped/another",
        )
        assert request.subcommand is Subcommand.GRANT

    def test_revoke_request(self):
        request = parse_request(["revoke", "myorg:myteam"])
        assert request == RevokeRequest(team="myorg:myteam", package=None)

    def test_package_request(self):
        request = parse_request(["2fa-required", "@scope/pkg"])
        assert request == PackageRequest(subcommand=Subcommand.TFA_REQUIRED, package="@scope/pkg")

    def test_ls_packages_request(self):
        assert parse_request(["ls-packages"]) == ListPackagesRequest(entity=None)
        assert parse_request(["ls-packages", "org"]) == ListPackagesRequest(entity="org")

    def test_ls_collaborators_request(self):
        request = parse_request(["ls-collaborators", "yargs", "alice"])
        assert request == ListCollaboratorsRequest(package="yargs", user="alice")

    def test_tuple_argv(self):
        """Any sequence works, not just lists."""
        request = parse_request(("public",))
        assert request.subcommand is Subcommand.PUBLIC

    def test_extra_arguments_ignored(self):
        request = parse_request(["revoke", "myorg:myteam", "@scoped/another", "surplus"])
        assert request.package == "@scoped/another"


class TestValidators:
    """Tests for the shared validators."""

    @pytest.mark.parametrize(
        "team",
        ["myorg:myteam", "@example:developers", "org:team:extra", "a:b"],
    )
    def test_valid_team(self, team):
        assert validate_team_ref(team, "First") == team

    @pytest.mark.parametrize("team", ["foo", "", ":team", "org:", ":", "@:team"])
    def test_malformed_team(self, team):
        with pytest.raises(TeamMalformedError) as exc_info:
            validate_team_ref(team, "Third")

        assert exc_info.value.value == team
        assert "Usage: Third argument used incorrect format." in str(exc_info.value)
        assert "Example: @example:developers" in str(exc_info.value)

    def test_missing_team(self):
        with pytest.raises(TeamMissingError):
            validate_team_ref(None, "First")

    def test_permission_levels(self):
        assert validate_permission("read-only") is PermissionLevel.READ_ONLY
        assert validate_permission("read-write") is PermissionLevel.READ_WRITE

    @pytest.mark.parametrize("value", [None, "", "READ-ONLY", "write"])
    def test_invalid_permission(self, value):
        with pytest.raises(PermissionInvalidError):
            validate_permission(value)

    @pytest.mark.parametrize(
        "package,expected",
        [
            ("@scoped/pkg", True),
            ("@scoped/npm-access-public-pkg", True),
            ("@scoped/", True),
            ("pkg", False),
            ("@scoped", False),
            ("@/pkg", False),
            ("scoped/@pkg", False),
        ],
    )
    def test_is_scoped(self, package, expected):
        assert is_scoped(package) is expected


class TestCompletion:
    """Tests for complete()."""

    def test_all_subcommands(self):
        assert list(complete(["npm", "access"])) == [
            "public",
            "restricted",
            "grant",
            "revoke",
            "ls-packages",
            "ls-collaborators",
            "edit",
            "2fa-required",
            "2fa-not-required",
        ]

    def test_completion_order_covers_every_subcommand(self):
        assert set(COMPLETION_ORDER) == set(Subcommand)

    def test_grant_permissions(self):
        assert list(complete(["npm", "access", "grant"])) == ["read-only", "read-write"]

    def test_grant_after_permission(self):
        assert list(complete(["npm", "access", "grant", "read-only"])) == []

    @pytest.mark.parametrize(
        "subcommand",
        [
            "public",
            "restricted",
            "revoke",
            "ls-packages",
            "ls-collaborators",
            "edit",
            "2fa-required",
            "2fa-not-required",
        ],
    )
    def test_other_subcommands_complete_nothing(self, subcommand):
        assert list(complete(["npm", "access", subcommand])) == []

    def test_more_arguments_complete_nothing(self):
        assert list(complete(["npm", "access", "revoke", "myorg:myteam", "@s/p"])) == []

    def test_unrecognized_rejected(self):
        with pytest.raises(CompletionUnrecognizedError, match="foobar not recognized"):
            complete(["npm", "access", "foobar"])

    def test_result_is_lazy(self):
        assert isinstance(complete(["npm", "access"]), types.GeneratorType)

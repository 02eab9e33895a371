"""Pytest fixtures for registry-access tests."""

import json

import pytest

REGISTRY = "https://registry.npmjs.org"


class RecordingClient:
    """Registry client double that records every call."""

    def __init__(self, packages=None, collaborators=None, username="foo"):
        self.calls = []
        self.packages = packages if packages is not None else {}
        self.collaborators = collaborators if collaborators is not None else {}
        self.username = username

    def set_public(self, package, registry=None):
        self.calls.append(("set_public", package, registry))
        return True

    def set_restricted(self, package, registry=None):
        self.calls.append(("set_restricted", package, registry))
        return True

    def grant(self, package, team, permission):
        self.calls.append(("grant", package, team, permission))
        return True

    def revoke(self, package, team):
        self.calls.append(("revoke", package, team))
        return True

    def tfa_required(self, package):
        self.calls.append(("tfa_required", package))
        return True

    def tfa_not_required(self, package):
        self.calls.append(("tfa_not_required", package))
        return True

    def list_packages(self, entity):
        self.calls.append(("list_packages", entity))
        return self.packages

    def list_collaborators(self, package, user=None):
        self.calls.append(("list_collaborators", package, user))
        return self.collaborators

    def whoami(self):
        self.calls.append(("whoami",))
        return self.username


class FakeIdentity:
    """Identity resolver that counts lookups."""

    def __init__(self, identity="foo"):
        self.identity = identity
        self.lookups = 0

    def get_self_identity(self):
        self.lookups += 1
        return self.identity


class CollectingOutput:
    """Output sink that keeps everything it is given."""

    def __init__(self):
        self.items = []

    def __call__(self, data):
        self.items.append(data)


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory, monkeypatch):
    """Keep the real ~/.config/registry-access out of every test."""
    user_config = tmp_path_factory.mktemp("user-config") / "config.toml"
    monkeypatch.setattr("registry_access.config.USER_CONFIG_PATH", user_config)
    monkeypatch.setattr("registry_access.cli.config_cmd.USER_CONFIG_PATH", user_config)
    return user_config


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def output():
    return CollectingOutput()


@pytest.fixture
def router(client, identity, output):
    from registry_access.access import AccessRouter

    return AccessRouter(client, identity=identity, output=output)


@pytest.fixture
def project_dir(tmp_path):
    """Empty project directory that stops config discovery at its .git."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def make_manifest(project_dir):
    """Write package.json into the project directory.

    Pass a dict to serialize it, or a string to write it verbatim.
    """

    def _make(content):
        path = project_dir / "package.json"
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(json.dumps(content))
        return project_dir

    return _make


@pytest.fixture
def options(project_dir):
    from registry_access.access import AccessOptions

    return AccessOptions(registry=REGISTRY, prefix=project_dir)

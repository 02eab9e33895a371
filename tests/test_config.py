"""Tests for configuration file support."""

import sys
import warnings

import pytest

from registry_access.config import (
    Config,
    ConfigError,
    DefaultsConfig,
    RegistryConfig,
    _find_project_config,
    _load_toml_file,
    generate_template,
    get_config_paths,
)
from registry_access.exceptions import ConfigurationError


class TestConfigDataclasses:
    """Test configuration dataclass defaults."""

    def test_defaults_config_defaults(self):
        config = DefaultsConfig()
        assert config.verbose is False
        assert config.quiet is False

    def test_registry_config_defaults(self):
        config = RegistryConfig()
        assert config.url == "https://registry.npmjs.org"
        assert config.token is None
        assert config.username is None
        assert config.timeout == 30.0

    def test_config_defaults(self):
        config = Config()
        assert isinstance(config.defaults, DefaultsConfig)
        assert isinstance(config.registry, RegistryConfig)


class TestConfigDiscovery:
    """Test config file discovery."""

    def test_find_project_config_in_current_dir(self, tmp_path):
        config_file = tmp_path / ".registry-access.toml"
        config_file.write_text("[registry]\nurl = 'https://r.example'\n")

        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_alternate_name(self, tmp_path):
        config_file = tmp_path / "registry-access.toml"
        config_file.write_text("[registry]\n")

        assert _find_project_config(tmp_path) == config_file

    def test_find_project_config_prefers_hidden(self, tmp_path):
        """Hidden .registry-access.toml is preferred over registry-access.toml."""
        (tmp_path / "registry-access.toml").write_text("[registry]\n")
        hidden = tmp_path / ".registry-access.toml"
        hidden.write_text("[registry]\n")

        assert _find_project_config(tmp_path) == hidden

    def test_find_project_config_walks_up(self, tmp_path):
        parent_config = tmp_path / ".registry-access.toml"
        parent_config.write_text("[registry]\n")

        subdir = tmp_path / "packages" / "widgets"
        subdir.mkdir(parents=True)

        assert _find_project_config(subdir) == parent_config

    def test_find_project_config_stops_at_git(self, tmp_path):
        """Config above the .git directory is not found."""
        parent = tmp_path / "parent"
        project = parent / "project"
        project.mkdir(parents=True)
        (project / ".git").mkdir()
        (parent / ".registry-access.toml").write_text("[registry]\n")

        assert _find_project_config(project) is None

    def test_find_project_config_finds_in_git_root(self, tmp_path):
        (tmp_path / ".git").mkdir()
        config_file = tmp_path / ".registry-access.toml"
        config_file.write_text("[registry]\n")

        assert _find_project_config(tmp_path) == config_file


class TestLoadToml:
    """Test TOML file loading."""

    def test_load_valid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text('[registry]\nurl = "https://r.example"\ntimeout = 10\n')

        result = _load_toml_file(config_file)
        assert result["registry"]["url"] == "https://r.example"
        assert result["registry"]["timeout"] == 10

    def test_load_invalid_toml(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("invalid [ toml syntax")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _load_toml_file(config_file)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            _load_toml_file(tmp_path / "nonexistent.toml")

    def test_config_error_is_registry_access_error(self):
        assert issubclass(ConfigError, ConfigurationError)


class TestConfigLoad:
    """Test Config.load() method."""

    def test_load_defaults_only(self, project_dir):
        config = Config.load(project_dir)
        assert config.registry.url == "https://registry.npmjs.org"
        assert config.defaults.verbose is False

    def test_load_project_config(self, project_dir):
        (project_dir / ".registry-access.toml").write_text(
            '[registry]\nurl = "https://r.example"\nusername = "alice"\n'
        )

        config = Config.load(project_dir)
        assert config.registry.url == "https://r.example"
        assert config.registry.username == "alice"

    def test_load_user_config(self, project_dir, isolated_user_config):
        isolated_user_config.write_text('[defaults]\nverbose = true\n\n[registry]\ntoken = "t"\n')

        config = Config.load(project_dir)
        assert config.defaults.verbose is True
        assert config.registry.token == "t"

    def test_project_overrides_user(self, project_dir, isolated_user_config):
        isolated_user_config.write_text(
            '[registry]\nurl = "https://user.example"\ntoken = "t"\n'
        )
        (project_dir / ".registry-access.toml").write_text(
            '[registry]\nurl = "https://project.example"\n'
        )

        config = Config.load(project_dir)
        assert config.registry.url == "https://project.example"
        # User value preserved when not in project
        assert config.registry.token == "t"

    def test_get_source_tracking(self, project_dir, isolated_user_config):
        isolated_user_config.write_text('[registry]\ntoken = "t"\n')
        (project_dir / ".registry-access.toml").write_text("[registry]\ntimeout = 5\n")

        config = Config.load(project_dir)

        assert config.get_source("registry.token") == str(isolated_user_config)
        assert ".registry-access.toml" in config.get_source("registry.timeout")
        assert config.get_source("registry.url") == "default"

    @pytest.mark.parametrize("timeout", ["0", "-1", '"soon"'])
    def test_invalid_timeout(self, project_dir, timeout):
        (project_dir / ".registry-access.toml").write_text(f"[registry]\ntimeout = {timeout}\n")

        with pytest.raises(ConfigError, match="timeout"):
            Config.load(project_dir)

    @pytest.mark.parametrize(
        "content,message",
        [
            ("[registry]\nurl = 1\n", "registry.url .* must be a string"),
            ("[registry]\ntoken = true\n", "registry.token .* must be a string"),
            ("[registry]\nusername = ['a']\n", "registry.username .* must be a string"),
            ("[registry]\ntimeout = true\n", "registry.timeout .* must be a number"),
            ('[defaults]\nverbose = "yes"\n', "defaults.verbose .* must be a boolean"),
            ("[defaults]\nquiet = 1\n", "defaults.quiet .* must be a boolean"),
        ],
    )
    def test_wrong_value_type(self, project_dir, content, message):
        (project_dir / ".registry-access.toml").write_text(content)

        with pytest.raises(ConfigError, match=message):
            Config.load(project_dir)

    def test_float_timeout_accepted(self, project_dir):
        (project_dir / ".registry-access.toml").write_text("[registry]\ntimeout = 2.5\n")
        assert Config.load(project_dir).registry.timeout == 2.5

    def test_section_must_be_table(self, project_dir):
        (project_dir / ".registry-access.toml").write_text('registry = "https://r.example"\n')

        with pytest.raises(ConfigError, match="must be a table"):
            Config.load(project_dir)


class TestConfigWarnings:
    """Test warnings for unknown config keys."""

    def test_warn_unknown_section(self, project_dir):
        (project_dir / ".registry-access.toml").write_text('[unknown_section]\nkey = "value"\n')

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(project_dir)

            assert len(w) == 1
            assert "unknown_section" in str(w[0].message)

    def test_warn_unknown_key_in_section(self, project_dir):
        (project_dir / ".registry-access.toml").write_text('[registry]\nproxy = "value"\n')

        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            Config.load(project_dir)

            assert len(w) == 1
            assert "registry.proxy" in str(w[0].message)


class TestGenerateTemplate:
    """Test template generation."""

    def test_generate_template_valid_toml(self):
        """Generated template is valid TOML."""
        if sys.version_info >= (3, 11):
            import tomllib
        else:
            import tomli as tomllib

        result = tomllib.loads(generate_template())
        assert isinstance(result, dict)

    def test_generate_template_has_sections(self):
        template = generate_template()
        assert "[defaults]" in template
        assert "[registry]" in template
        for key in ("url", "token", "username", "timeout"):
            assert key in template


class TestGetConfigPaths:
    """Test get_config_paths function."""

    def test_returns_none_for_missing_files(self, project_dir, monkeypatch):
        monkeypatch.chdir(project_dir)

        paths = get_config_paths()
        assert paths["user"] is None
        assert paths["project"] is None

    def test_returns_paths_for_existing_files(self, project_dir, isolated_user_config, monkeypatch):
        project_config = project_dir / ".registry-access.toml"
        project_config.write_text("[registry]\n")
        isolated_user_config.write_text("[registry]\n")
        monkeypatch.chdir(project_dir)

        paths = get_config_paths()
        assert paths["user"] == isolated_user_config
        assert paths["project"] == project_config

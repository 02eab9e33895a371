"""
Configuration file support for registry-access.

Provides hierarchical configuration loading from:
1. Project config: .registry-access.toml or registry-access.toml in project root
2. User config: ~/.config/registry-access/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .client import DEFAULT_REGISTRY
from .exceptions import ConfigurationError

# Config file names to search for in project directories
CONFIG_FILENAMES = [".registry-access.toml", "registry-access.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "registry-access" / "config.toml"

# Expected TOML value type of every known key
KEY_TYPES = {
    "defaults": {"verbose": bool, "quiet": bool},
    "registry": {"url": str, "token": str, "username": str, "timeout": (int, float)},
}

# All known config keys for validation
KNOWN_KEYS = {section: set(keys) for section, keys in KEY_TYPES.items()}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class RegistryConfig:
    """Registry endpoint and credentials."""

    url: str = DEFAULT_REGISTRY
    token: str | None = None
    username: str | None = None
    timeout: float = 30.0


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)

    # Track which file each setting came from (for --show)
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


class ConfigError(ConfigurationError):
    """Configuration-related errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file.

    Raises:
        ConfigError: If TOML is invalid or unreadable
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section in KNOWN_KEYS:
        if section not in data:
            continue
        section_data = data[section]
        if not isinstance(section_data, dict):
            raise ConfigError(f"Config section [{section}] in {source} must be a table")
        _warn_unknown_keys(section_data, KNOWN_KEYS[section], section, source)

        target = getattr(config, section)
        for key in sorted(KNOWN_KEYS[section]):
            if key in section_data:
                value = section_data[key]
                _check_type(f"{section}.{key}", value, KEY_TYPES[section][key], source)
                setattr(target, key, value)
                sources[f"{section}.{key}"] = source

    if config.registry.timeout <= 0:
        raise ConfigError(
            f"registry.timeout must be a positive number, got {config.registry.timeout!r}"
        )


def _check_type(key: str, value: Any, expected: type | tuple[type, ...], source: str) -> None:
    """Raise ConfigError unless ``value`` has the expected TOML type."""
    # TOML booleans are ints to Python but never valid numbers here
    if isinstance(value, bool) and expected is not bool:
        valid = False
    else:
        valid = isinstance(value, expected)

    if not valid:
        names = {bool: "a boolean", str: "a string"}
        expected_name = names.get(expected, "a number")
        raise ConfigError(f"{key} in {source} must be {expected_name}, got {value!r}")


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return f"""# registry-access configuration file
# Place as .registry-access.toml in project root or ~/.config/registry-access/config.toml for user defaults

[defaults]
# Enable verbose output (debug logging, stack traces) by default
# verbose = false

# Enable quiet mode by default
# quiet = false

[registry]
# Registry endpoint
# url = "{DEFAULT_REGISTRY}"

# Bearer token for authenticated access endpoints (keep this in the user config)
# token = ""

# Username used by ls-packages when no entity is given (skips the whoami lookup)
# username = ""

# Request timeout in seconds
# timeout = 30
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }

"""
Config command implementation for registry-access CLI.

Usage:
    registry-access config --show          Show effective configuration with sources
    registry-access config --init          Create template config file
    registry-access config get <key>       Get a specific config value
    registry-access config set <key> <value>  Show how to set a config value
"""

import sys
from pathlib import Path

from registry_access.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    ConfigError,
    generate_template,
    get_config_paths,
)

# Keys never echoed back verbatim
SECRET_KEYS = {"registry.token"}


def run_config(
    show: bool = False,
    init: bool = False,
    paths: bool = False,
    user: bool = False,
    action: str | None = None,
    key: str | None = None,
    value: str | None = None,
) -> int:
    """Run one config action and return an exit code."""
    try:
        if show:
            return _show_config()
        elif init:
            return _init_config(user)
        elif paths:
            return _show_paths()
        elif action == "get":
            if not key:
                print("Error: 'get' requires a key argument", file=sys.stderr)
                return 1
            return _get_config(key)
        elif action == "set":
            if not key or value is None:
                print("Error: 'set' requires key and value arguments", file=sys.stderr)
                return 1
            return _set_config(key, value)
        else:
            return _show_config()

    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _format_value(key: str, value) -> str:
    if value is not None and key in SECRET_KEYS:
        return '"********"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "# not set"
    return str(value)


def _print_value(section: str, key: str, value, source: str) -> None:
    """Print a config value with its source."""
    formatted = _format_value(f"{section}.{key}", value)
    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {formatted}  # from: {source_display}")


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective registry-access configuration")
    print()

    print("[defaults]")
    for key in ("verbose", "quiet"):
        _print_value(
            "defaults", key, getattr(config.defaults, key), config.get_source(f"defaults.{key}")
        )
    print()

    print("[registry]")
    for key in ("url", "token", "username", "timeout"):
        _print_value(
            "registry", key, getattr(config.registry, key), config.get_source(f"registry.{key}")
        )

    return 0


def _show_paths() -> int:
    """Show config file paths."""
    paths = get_config_paths()

    print("Config file paths:")
    print()

    print(f"User config: {USER_CONFIG_PATH}")
    print("  Status: exists" if paths["user"] else "  Status: not found")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if paths["project"]:
        print(f"  Found: {paths['project']}")
    else:
        print("  Status: not found")

    return 0


def _init_config(user: bool = False) -> int:
    """Create a template config file."""
    if user:
        target = USER_CONFIG_PATH
        target.parent.mkdir(parents=True, exist_ok=True)
    else:
        target = Path.cwd() / CONFIG_FILENAMES[0]

    if target.exists():
        print(f"Error: Config file already exists: {target}", file=sys.stderr)
        print("Remove it first or edit manually.", file=sys.stderr)
        return 1

    try:
        target.write_text(generate_template())
    except OSError as e:
        print(f"Error writing config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config template: {target}")
    print()
    print("Uncomment and modify values as needed.")
    return 0


def _lookup(config: Config, key: str):
    """Split ``section.key`` and return (section_obj, attr), printing errors."""
    parts = key.split(".")
    if len(parts) != 2:
        print(f"Error: Invalid key format '{key}'. Use 'section.key' format.", file=sys.stderr)
        return None, None

    section, attr = parts
    section_obj = getattr(config, section, None) if not section.startswith("_") else None
    if section_obj is None:
        print(f"Error: Unknown config section '{section}'", file=sys.stderr)
        return None, None

    if not hasattr(section_obj, attr):
        print(f"Error: Unknown key '{attr}' in section '{section}'", file=sys.stderr)
        return None, None

    return section_obj, attr


def _get_config(key: str) -> int:
    """Get a specific config value."""
    config = Config.load()
    section_obj, attr = _lookup(config, key)
    if section_obj is None:
        return 1

    value = getattr(section_obj, attr)
    if value is None:
        print("# not set")
    elif key in SECRET_KEYS:
        print("********")
    elif isinstance(value, bool):
        print("true" if value else "false")
    else:
        print(value)

    source = config.get_source(key)
    if source != "default":
        print(f"# source: {source}", file=sys.stderr)

    return 0


def _set_config(key: str, value: str) -> int:
    """
    Guide user to set a config value.

    Config files are not rewritten; the TOML to add is printed instead.
    """
    config = Config.load()
    section_obj, attr = _lookup(config, key)
    if section_obj is None:
        return 1

    current = getattr(section_obj, attr)

    if isinstance(current, bool):
        if value.lower() in ("true", "1", "yes"):
            formatted = "true"
        elif value.lower() in ("false", "0", "no"):
            formatted = "false"
        else:
            print(f"Error: Invalid boolean value '{value}'", file=sys.stderr)
            return 1
    elif isinstance(current, (int, float)):
        try:
            float(value)
        except ValueError:
            print(f"Error: Invalid number '{value}'", file=sys.stderr)
            return 1
        formatted = value
    else:
        formatted = f'"{value}"'

    section = key.split(".")[0]
    project_config = get_config_paths()["project"] or Path.cwd() / CONFIG_FILENAMES[0]

    print(f"To set {key}, add to your config file:")
    print()
    print(f"  File: {project_config}")
    print()
    print(f"  [{section}]")
    print(f"  {attr} = {formatted}")
    print()
    print("Or run: registry-access config --init")

    return 0

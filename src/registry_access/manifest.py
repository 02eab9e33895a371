"""
Manifest lookup for the default package reference.

When an access subcommand is run without an explicit package, the name
comes from ``package.json`` in the working directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from .exceptions import ManifestParseError, PackageUnresolvableError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


@runtime_checkable
class ManifestResolver(Protocol):
    """Reads the declared package name for a project directory."""

    def resolve_package_name(self, cwd: Path) -> str:
        """Return the package name declared in ``cwd``.

        Raises:
            PackageUnresolvableError: No manifest, or it declares no name.
            ManifestParseError: The manifest is not valid JSON.
        """
        ...


class PackageJsonResolver:
    """Resolve package names from ``package.json``."""

    def __init__(self, filename: str = MANIFEST_FILENAME):
        self.filename = filename

    def resolve_package_name(self, cwd: Path) -> str:
        path = Path(cwd) / self.filename

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise PackageUnresolvableError(context={"manifest": str(path)}) from None
        except UnicodeDecodeError as e:
            raise ManifestParseError(e, file_path=path) from e
        except OSError as e:
            raise PackageUnresolvableError(
                f"no package name passed and manifest could not be read: {e.strerror or e}",
                context={"manifest": str(path)},
                suggestions=[f"Check that {self.filename} is a readable file"],
            ) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParseError(e, file_path=path, line=e.lineno, column=e.colno) from e

        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name.strip():
            raise PackageUnresolvableError(
                "no package name passed and manifest declares no name",
                context={"manifest": str(path)},
                suggestions=[f"Add a \"name\" field to {self.filename}"],
            )

        logger.debug(f"Resolved package {name} from {path}")
        return name

"""
Dependency record model for gopackage.

A :class:`DepsRecord` is the snapshot written by ``gopackage load``: the
target packages, the Go version they were loaded with (used as the
minimum version for rebuilds), and their third-party dependency set. It
is persisted as JSON and reloaded verbatim until the next load.
"""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from gopackage.exceptions import RecordError

#: JSON keys of the persisted record.
PACKAGES_KEY = "packages"
GO_VERSION_KEY = "goVersion"
DEPENDENCIES_KEY = "dependencies"


def _string_list(data: Mapping[str, Any], key: str, source: Optional[str]) -> List[str]:
    """Read a list of strings from ``data``, defaulting to empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RecordError(f"'{key}' must be a list of strings", file_path=source)
    return list(value)


@dataclass
class DepsRecord:
    """
    Persisted dependency snapshot of a set of Go build targets.

    Attributes:
        packages: Import paths of the targets, in the order given.
        go_version: Minimum Go version required to rebuild the targets.
        dependencies: Sorted, unique third-party import paths.
    """

    packages: List[str] = field(default_factory=list)
    go_version: str = ""
    dependencies: List[str] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @staticmethod
    def binary_name(package: str) -> str:
        """Return the name ``go install`` gives the binary of ``package``."""
        return posixpath.basename(package.rstrip("/"))

    def binary_names(self) -> Dict[str, str]:
        """Map each target package to its binary name."""
        return {pkg: self.binary_name(pkg) for pkg in self.packages}

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return the record using its persisted JSON keys."""
        return {
            PACKAGES_KEY: list(self.packages),
            GO_VERSION_KEY: self.go_version,
            DEPENDENCIES_KEY: list(self.dependencies),
        }

    def to_json(self) -> str:
        """Serialize the record as indented JSON."""
        return json.dumps(self.to_dict(), indent=2) + "\n"

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        source: Optional[str] = None,
    ) -> "DepsRecord":
        """
        Build a record from its persisted representation.

        Unknown keys are ignored and missing keys default to empty values.

        Args:
            data: Decoded JSON object.
            source: Origin of the data, used in error messages.

        Raises:
            RecordError: ``data`` is not an object or a key has the
                wrong type.
        """
        if not isinstance(data, Mapping):
            raise RecordError("Record must be a JSON object", file_path=source)

        go_version = data.get(GO_VERSION_KEY, "")
        if go_version is None:
            go_version = ""
        if not isinstance(go_version, str):
            raise RecordError(f"'{GO_VERSION_KEY}' must be a string", file_path=source)

        return cls(
            packages=_string_list(data, PACKAGES_KEY, source),
            go_version=go_version,
            dependencies=_string_list(data, DEPENDENCIES_KEY, source),
        )

    @classmethod
    def from_json(cls, text: str, *, source: Optional[str] = None) -> "DepsRecord":
        """Parse a record from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RecordError(f"Invalid JSON: {exc}", file_path=source) from exc
        return cls.from_dict(data, source=source)

"""Go toolchain queries for gopackage.

:class:`GoToolchain` wraps the three introspection facilities gopackage
needs from the ``go`` command:

1. **Package metadata** (``go list -json <pkg>``): the transitive imports
   of a package, reported in its ``Deps`` field.
2. **Package resolution** (``go list -json <import>``): whether an import
   path belongs to the standard library (``Standard`` / ``Goroot``).
3. **Version** (``go env GOVERSION``, falling back to ``go version``).

Every query is a single captured subprocess run through a
:class:`~gopackage.core.runner.ProcessRunner`; failures surface as
:class:`~gopackage.exceptions.ToolchainError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from gopackage.constants import DEFAULT_GO_BINARY
from gopackage.core.runner import CommandResult, ProcessRunner
from gopackage.exceptions import ToolchainError
from gopackage.utils.logger import get_logger

logger = get_logger("toolchain")

__all__ = ["GoToolchain", "decode_json_stream"]

_VERSION_OUTPUT_PREFIX = "go version "


def decode_json_stream(text: str) -> List[Dict[str, Any]]:
    """Decode the concatenated JSON objects printed by ``go list -json``.

    ``go list`` prints one object per matched package with no separator,
    so a pattern such as ``example.com/app/...`` yields several objects.

    Raises:
        ValueError: The text is not a sequence of JSON objects.
    """
    decoder = json.JSONDecoder()
    objects: List[Dict[str, Any]] = []
    idx = 0
    length = len(text)

    while True:
        while idx < length and text[idx].isspace():
            idx += 1
        if idx >= length:
            break
        obj, idx = decoder.raw_decode(text, idx)
        if not isinstance(obj, dict):
            raise ValueError(f"Expected a JSON object, got {type(obj).__name__}")
        objects.append(obj)

    return objects


class GoToolchain:
    """Query an installed Go toolchain.

    Args:
        runner: Process runner used for every invocation.
        go_binary: Name or path of the ``go`` executable.
        cwd: Working directory for queries (relative imports resolve here).
        env: Environment overrides applied to every query.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        *,
        go_binary: str = DEFAULT_GO_BINARY,
        cwd: Optional[Union[str, Path]] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.runner = runner or ProcessRunner()
        self.go_binary = go_binary
        self.cwd = cwd
        self.env: Dict[str, str] = dict(env) if env else {}

    # ------------------------------------------------------------------
    # Low-level invocation
    # ------------------------------------------------------------------

    def _query(self, *args: str) -> CommandResult:
        """Run ``go <args>`` with captured output, raising on failure."""
        argv = [self.go_binary, *args]
        result = self.runner.run(argv, cwd=self.cwd, env=self.env, capture=True)
        if not result.ok:
            raise ToolchainError(
                f"'{' '.join(argv)}' failed",
                command=argv,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result

    def list_packages(self, pattern: str) -> List[Dict[str, Any]]:
        """Return the ``go list -json`` objects for ``pattern``.

        Raises:
            ToolchainError: ``go list`` failed, printed invalid JSON, or
                reported a load error for a matched package.
        """
        result = self._query("list", "-json", pattern)

        try:
            packages = decode_json_stream(result.stdout)
        except ValueError as exc:
            raise ToolchainError(
                f"Unparseable 'go list' output for {pattern}: {exc}",
                command=result.args,
            ) from exc

        for pkg in packages:
            error = pkg.get("Error")
            if error:
                message = error.get("Err") if isinstance(error, dict) else str(error)
                raise ToolchainError(
                    f"Cannot load package {pkg.get('ImportPath', pattern)}: {message}",
                    command=result.args,
                )

        return packages

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_imports(self, package: str) -> List[str]:
        """Return the transitive imports of ``package``.

        When ``package`` is a pattern matching several packages their
        imports are concatenated; callers deduplicate.
        """
        imports: List[str] = []
        for pkg in self.list_packages(package):
            imports.extend(pkg.get("Deps") or [])

        logger.debug("%s has %d transitive imports", package, len(imports))
        return imports

    def is_standard(self, import_path: str) -> bool:
        """Return True if ``import_path`` resolves into the Go installation root."""
        packages = self.list_packages(import_path)
        if not packages:
            raise ToolchainError(f"Cannot resolve import path {import_path}")

        info = packages[0]
        return bool(info.get("Standard") or info.get("Goroot"))

    def version(self) -> str:
        """Return the installed toolchain's version tag, e.g. ``go1.22.1``."""
        try:
            reported = self._query("env", "GOVERSION").stdout.strip()
        except ToolchainError as exc:
            logger.debug("'go env GOVERSION' unavailable: %s", exc)
            reported = ""

        if reported:
            return reported

        output = self._query("version").stdout.strip()
        if not output.startswith(_VERSION_OUTPUT_PREFIX):
            raise ToolchainError(f"Unrecognized 'go version' output: {output!r}")

        version = output[len(_VERSION_OUTPUT_PREFIX):]
        if version.startswith("go"):
            # "go1.4.2 linux/amd64" -> "go1.4.2"
            version = version.split()[0]
        return version

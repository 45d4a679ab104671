"""Third-party dependency collection for gopackage.

:class:`DependencyCollector` computes the dependency set recorded by
``gopackage load``:

1. Query the transitive imports of every target package.
2. Union them, collapsing duplicates across targets.
3. Resolve each import and drop those that belong to the standard library.
4. Sort what remains lexicographically.

Failure policy is an explicit choice made by the caller:

- **best effort** (default): a target whose imports cannot be listed
  contributes nothing, and an import that cannot be resolved is left out.
  Both are logged and kept in :attr:`DependencyCollector.skipped`.
- **strict**: the first failed query raises
  :class:`~gopackage.exceptions.CollectionError`.

Typical usage::

    collector = DependencyCollector(GoToolchain())
    deps = collector.collect(["example.com/app/cmd/server"])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set

from gopackage.constants import DEFAULT_STRICT_COLLECTION
from gopackage.core.toolchain import GoToolchain
from gopackage.exceptions import CollectionError, ToolchainError
from gopackage.utils.logger import get_logger

logger = get_logger("collector")

__all__ = ["DependencyCollector", "SkippedEntry"]


@dataclass(frozen=True)
class SkippedEntry:
    """A package or import left out of a best-effort collection.

    Attributes:
        path: The package identifier or import path.
        stage: ``"list"`` for a target query, ``"resolve"`` for an import.
        reason: Error message reported by the toolchain.
    """

    path: str
    stage: str
    reason: str


class DependencyCollector:
    """Collect the third-party imports of a set of Go packages.

    Args:
        toolchain: Toolchain used for metadata and resolution queries.
        strict: Raise on the first failed query instead of skipping it.
    """

    def __init__(
        self,
        toolchain: GoToolchain,
        *,
        strict: bool = DEFAULT_STRICT_COLLECTION,
    ) -> None:
        self.toolchain = toolchain
        self.strict = strict
        self.skipped: List[SkippedEntry] = []

    def collect(self, packages: Iterable[str]) -> List[str]:
        """Return the sorted third-party dependency set of ``packages``.

        Args:
            packages: Package identifiers understood by ``go list``.

        Returns:
            Unique, ascending import paths with no standard library entry.

        Raises:
            CollectionError: In strict mode, when any query fails.
        """
        self.skipped = []

        imports = self._union_imports(packages)
        # Resolving in sorted order keeps the result sorted
        third_party = [path for path in sorted(imports) if self._is_third_party(path)]

        logger.info(
            "Collected %d third-party dependencies (%d imports, %d skipped)",
            len(third_party),
            len(imports),
            len(self.skipped),
        )
        return third_party

    def _union_imports(self, packages: Iterable[str]) -> Set[str]:
        imports: Set[str] = set()

        for package in packages:
            try:
                imports.update(self.toolchain.list_imports(package))
            except ToolchainError as exc:
                self._skip(package, "list", exc)

        return imports

    def _is_third_party(self, import_path: str) -> bool:
        try:
            standard = self.toolchain.is_standard(import_path)
        except ToolchainError as exc:
            self._skip(import_path, "resolve", exc)
            return False

        if standard:
            logger.debug("Skipping standard library import %s", import_path)
        return not standard

    def _skip(self, path: str, stage: str, exc: ToolchainError) -> None:
        """Record a failed query, or raise it in strict mode."""
        if self.strict:
            what = "list imports of" if stage == "list" else "resolve import"
            raise CollectionError(
                f"Cannot {what} {path}: {exc.message}",
                import_path=path,
                original_error=exc,
            ) from exc

        logger.warning("Skipping %s (%s failed): %s", path, stage, exc)
        self.skipped.append(SkippedEntry(path=path, stage=stage, reason=str(exc)))

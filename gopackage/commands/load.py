"""Load command implementation for gopackage.

Computes the third-party dependency set of one or more Go packages and
writes it, together with the installed Go version, to the record file
(``gopackage.json`` by default). Later ``get`` and ``install`` runs replay
this record without recomputing it.

Typical usage::

    $ gopackage load github.com/acme/app/cmd/server github.com/acme/app/cmd/cli

    # Fail on the first package or import the toolchain cannot resolve
    $ gopackage load --strict github.com/acme/app/...
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import click

from gopackage.context import GoPackageContext, pass_context
from gopackage.core import SkippedEntry
from gopackage.models import DepsRecord
from gopackage.utils import (
    get_logger,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.load")


@click.command()
@click.argument("packages", nargs=-1, required=True)
@click.option(
    "--strict/--best-effort",
    default=None,
    help="Abort on the first failed toolchain query instead of skipping it "
    "(default from the strict_collection setting).",
)
@pass_context
def load(
    ctx: GoPackageContext,
    packages: Tuple[str, ...],
    strict: Optional[bool],
) -> None:
    """Record the third-party dependencies of PACKAGES.

    Each package's transitive imports are listed with ``go list``, merged,
    and stripped of standard library packages. The sorted result is stored
    along with the current Go version, which becomes the minimum version
    for ``gopackage install``.
    """
    strict_mode = ctx.config.strict_collection if strict is None else strict
    targets = list(dict.fromkeys(packages))

    workspace = ctx.workspace()
    logger.info("Loading %d package(s), strict=%s", len(targets), strict_mode)
    record = workspace.load(targets, strict=strict_mode)

    _print_record_summary(record)
    if workspace.skipped:
        _print_skipped(workspace.skipped)

    print_success(
        f"Recorded {len(record.dependencies)} dependencies for "
        f"{len(record.packages)} package(s) in {workspace.store.path}"
    )


def _print_record_summary(record: DepsRecord) -> None:
    rows = [{"Dependency": dep} for dep in record.dependencies]
    print_table(
        rows,
        title=f"Third-party dependencies (Go {record.go_version})",
        column_styles={"Dependency": {"style": "cyan", "no_wrap": True}},
    )


def _print_skipped(skipped: List[SkippedEntry]) -> None:
    print_warning(
        f"{len(skipped)} package(s) or import(s) could not be resolved and "
        "were left out of the record"
    )
    print_table(
        [
            {"Path": entry.path, "Stage": entry.stage, "Reason": entry.reason}
            for entry in skipped
        ],
        title="Skipped",
    )

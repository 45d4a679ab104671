"""Get command implementation for gopackage.

Downloads every dependency stored in the record into the build GOPATH
(``./gopackage`` by default) with ``go get -d``. Output of the ``go``
command is streamed to the terminal. A dependency that fails to download
is reported but does not stop the others.
"""

from __future__ import annotations

import click

from gopackage.context import GoPackageContext, pass_context
from gopackage.utils import get_logger, print_info, print_success, print_warning

logger = get_logger("commands.get")


@click.command()
@pass_context
def get(ctx: GoPackageContext) -> None:
    """Download the recorded dependencies into the build GOPATH."""
    workspace = ctx.workspace()
    record = workspace.read()

    if not record.dependencies:
        print_info("The record lists no third-party dependencies")
        return

    print_info(
        f"Fetching {len(record.dependencies)} dependencies into "
        f"{workspace.paths.build_gopath}"
    )
    results = workspace.get(record)

    failed = [result.args[-1] for result in results if not result.ok]
    if failed:
        print_warning(f"Failed to fetch {len(failed)} dependency(ies): {', '.join(failed)}")
    else:
        print_success(f"Fetched {len(results)} dependencies")

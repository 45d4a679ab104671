"""Show command implementation for gopackage.

Prints the stored record without touching the Go toolchain.
"""

from __future__ import annotations

from pathlib import Path

import click

from gopackage.context import GoPackageContext, pass_context
from gopackage.core import RecordStore
from gopackage.utils import get_raw_console, print_table


@click.command()
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def show(ctx: GoPackageContext, output_format: str) -> None:
    """Show the stored dependency record."""
    store = RecordStore(ctx.config.record_file, base_dir=Path.cwd())
    record = store.read()

    if output_format.lower() == "json":
        click.echo(record.to_json(), nl=False)
        return

    console = get_raw_console()
    console.print(f"[bold]Record:[/bold] {store.path}")
    console.print(f"[bold]Minimum Go version:[/bold] {record.go_version or '<unknown>'}")

    print_table(
        [
            {"Package": pkg, "Binary": binary}
            for pkg, binary in record.binary_names().items()
        ],
        title="Packages",
    )
    print_table(
        [{"Dependency": dep} for dep in record.dependencies],
        title=f"Dependencies ({len(record.dependencies)})",
    )

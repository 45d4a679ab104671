"""CLI subcommands for gopackage."""

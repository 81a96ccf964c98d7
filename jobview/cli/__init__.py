"""jobview CLI — Typer-based command-line interface.

Provides the ``jobview`` command with subcommands for listing views and
their items, showing contributor activity, exporting build feeds,
searching, and creating items.

All output uses Rich for formatted terminal display.
"""

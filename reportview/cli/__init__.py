"""reportview CLI — Typer-based command-line interface.

Provides the ``reportview`` command with subcommands that arm the report
and log triggers, print the resulting page, or follow it live.

All output uses Rich for formatted terminal display.
"""

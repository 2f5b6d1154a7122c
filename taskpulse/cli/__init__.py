"""taskpulse CLI: Typer-based command-line interface.

Provides the ``taskpulse`` command with subcommands for replaying recorded
event streams, running a synthetic demo, and previewing label colors.

All output uses Rich for formatted terminal display.
"""

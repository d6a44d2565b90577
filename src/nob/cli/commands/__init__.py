"""Subcommands of the ``nob`` CLI."""

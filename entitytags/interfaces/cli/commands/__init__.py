"""CLI command implementations."""

from entitytags.interfaces.cli.commands.bulk_delete_cli import cmd_bulk_delete

__all__ = ["cmd_bulk_delete"]

#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from entitytags.interfaces.cli.commands.bulk_delete_cli import cmd_bulk_delete


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="etags",
        description="Entity tags - bulk maintenance of cloud resource tags",
        epilog="Examples:\n"
        "  etags bulk-delete --id aws:cluster:c1:prod:us-east-1 --tag owner\n"
        "  etags bulk-delete --entity-type servergroup --namespace legacy\n"
        "  etags bulk-delete --entity-type cluster --tag a --tag b",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'etags <command> --help' for command-specific help)",
    )

    # bulk-delete: Remove tags or a namespace from many records
    s = sub.add_parser("bulk-delete", help="Remove tags or a namespace from selected entity tags")
    s.add_argument("--id", action="append", metavar="ID", help="entity tags record id (repeatable)")
    s.add_argument(
        "--entity-ref", action="append", metavar="JSON", help="entity ref as a JSON object (repeatable)"
    )
    s.add_argument("--entity-type", metavar="TYPE", help="select every record of this entity type")
    s.add_argument("--namespace", metavar="NS", help="remove every tag in this namespace")
    s.add_argument("--tag", action="append", metavar="NAME", help="tag name to remove (repeatable)")
    s.set_defaults(func=cmd_bulk_delete)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())

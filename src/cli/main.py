"""IceCave CLI entry points.
This module exposes one-shot commands against a collection file.
It maps argparse commands onto collection calls.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import CollectionConfig
from core.errors import IceCaveError
from store.collection import IceCave


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="icecave", description="IceCave document store CLI")
    parser.add_argument("--directory", help="Override ICECAVE_DIRECTORY for this command")
    parser.add_argument("--name", help="Override ICECAVE_NAME for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_insert_command(subparsers)
    _add_filter_command(subparsers)
    _add_delete_command(subparsers)
    _add_update_command(subparsers)
    subparsers.add_parser("count", help="Print the number of stored documents")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the IceCave CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.directory, args.name)
        return asyncio.run(_run_command(config, args))
    except (IceCaveError, json.JSONDecodeError) as error:
        print(f"error={error}")
        return 1


def _build_config(directory: str | None, name: str | None) -> CollectionConfig:
    """Build collection config with optional overrides.

    Args:
        directory: Optional directory override.
        name: Optional collection name override.

    Returns:
        Collection configuration.
    """
    config = CollectionConfig.from_env()
    if directory:
        config = replace(config, directory=Path(directory).expanduser())
    if name:
        config = replace(config, name=name)
    return config


async def _run_command(config: CollectionConfig, args: argparse.Namespace) -> int:
    """Open the collection, run one command, and shut down.

    Args:
        config: Collection configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    async with IceCave(config) as collection:
        if args.command == "insert":
            collection.insert(json.loads(args.document))
            print(len(collection))
        elif args.command == "filter":
            print(json.dumps(collection.filter(json.loads(args.query))))
        elif args.command == "delete":
            before = len(collection)
            collection.delete(json.loads(args.query))
            print(before - len(collection))
        elif args.command == "update":
            updated = collection.update(json.loads(args.query), json.loads(args.patch))
            print(json.dumps(updated))
        elif args.command == "count":
            print(len(collection))
    return 0


def _add_insert_command(subparsers: Any) -> None:
    """Register insert subcommand."""
    parser = subparsers.add_parser("insert", help="Insert one JSON document")
    parser.add_argument("document", help="Document as JSON text")


def _add_filter_command(subparsers: Any) -> None:
    """Register filter subcommand."""
    parser = subparsers.add_parser("filter", help="Print documents matching a JSON Schema")
    parser.add_argument("query", help="JSON Schema query as JSON text")


def _add_delete_command(subparsers: Any) -> None:
    """Register delete subcommand."""
    parser = subparsers.add_parser("delete", help="Delete documents matching a JSON Schema")
    parser.add_argument("query", help="JSON Schema query as JSON text")


def _add_update_command(subparsers: Any) -> None:
    """Register update subcommand."""
    parser = subparsers.add_parser(
        "update",
        help="Apply a JSON patch to the first document matching a JSON Schema",
    )
    parser.add_argument("query", help="JSON Schema query as JSON text")
    parser.add_argument("patch", help="RFC 6902 patch operations as JSON text")

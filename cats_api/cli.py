"""Command-line client for the cats API.

Usage:
    cats [--url URL] list
    cats [--url URL] get ID
    cats [--url URL] add --name NAME --breed BREED --birth-date DATE [--death-date DATE]
    cats [--url URL] update ID [--name NAME] [--breed BREED] [--birth-date DATE]
                               [--death-date DATE | --alive]
    cats [--url URL] delete ID

Exit codes:
    0: Success
    1: API or transport error
    2: Usage error (argparse)
"""

import argparse
import os
import sys
from collections.abc import Callable, Sequence
from datetime import datetime

from cats_api.client import DEFAULT_BASE_URL, CatsClient, CatsClientError
from cats_api.core.clock import to_utc
from cats_api.schemas.cat import CatResponse


def _parse_datetime(value: str) -> datetime:
    """ISO date or datetime; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}, expected ISO format like 2020-01-31"
        )
    return to_utc(parsed)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid id {value!r}")
    if parsed < 1:
        raise argparse.ArgumentTypeError("id must be a positive integer")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cats", description="Manage cats via the cats API")
    parser.add_argument(
        "--url",
        default=os.environ.get("CATS_API_URL", DEFAULT_BASE_URL),
        help="Base URL of the cats API (env: CATS_API_URL)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all cats")

    get = commands.add_parser("get", help="Show one cat")
    get.add_argument("id", type=_positive_int)

    add = commands.add_parser("add", help="Create a cat")
    add.add_argument("--name", required=True)
    add.add_argument("--breed", required=True)
    add.add_argument("--birth-date", required=True, type=_parse_datetime)
    add.add_argument("--death-date", type=_parse_datetime)

    update = commands.add_parser("update", help="Change fields of a cat")
    update.add_argument("id", type=_positive_int)
    update.add_argument("--name")
    update.add_argument("--breed")
    update.add_argument("--birth-date", type=_parse_datetime)
    death = update.add_mutually_exclusive_group()
    death.add_argument("--death-date", type=_parse_datetime)
    death.add_argument("--alive", action="store_true", help="Clear the death date")

    delete = commands.add_parser("delete", help="Remove a cat")
    delete.add_argument("id", type=_positive_int)
    return parser


def format_cat(cat: CatResponse) -> str:
    line = f"- ID: {cat.id}, Name: {cat.name}, Breed: {cat.breed}, Age: {cat.age}"
    if not cat.is_alive and cat.death_date is not None:
        line += f", Died: {cat.death_date.date().isoformat()}"
    return line


def _update_payload(args: argparse.Namespace) -> dict[str, object]:
    changes: dict[str, object] = {}
    if args.name is not None:
        changes["name"] = args.name
    if args.breed is not None:
        changes["breed"] = args.breed
    if args.birth_date is not None:
        changes["birthDate"] = args.birth_date
    if args.alive:
        changes["deathDate"] = None
    elif args.death_date is not None:
        changes["deathDate"] = args.death_date
    return changes


def _dispatch(client: CatsClient, args: argparse.Namespace) -> int:
    if args.command == "list":
        cats = client.list_cats()
        if not cats:
            print("No cats found.")
        else:
            print("Cats:")
            for cat in cats:
                print(format_cat(cat))
    elif args.command == "get":
        print(format_cat(client.get_cat(args.id)))
    elif args.command == "add":
        cat = client.create_cat(
            args.name, args.breed, args.birth_date, args.death_date,
        )
        print("Successfully added cat:")
        print(format_cat(cat))
    elif args.command == "update":
        changes = _update_payload(args)
        if not changes:
            print("Nothing to update.", file=sys.stderr)
            return 2
        cat = client.update_cat(args.id, changes)
        print("Successfully updated cat:")
        print(format_cat(cat))
    elif args.command == "delete":
        client.delete_cat(args.id)
        print(f"Deleted cat {args.id}")
    return 0


def main(
    argv: Sequence[str] | None = None,
    client_factory: Callable[[str], CatsClient] = CatsClient,
) -> int:
    """Run one CLI command and return its exit code."""
    args = build_parser().parse_args(argv)
    with client_factory(args.url) as client:
        try:
            return _dispatch(client, args)
        except CatsClientError as e:
            label = f" ({e.code})" if e.code else ""
            print(f"Error{label}: {e.message}", file=sys.stderr)
            return 1


def entrypoint() -> None:
    sys.exit(main())

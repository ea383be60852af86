from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml
from pydantic import ValidationError

from ankiconnect.client import AnkiConnectClient
from ankiconnect.config import load_config
from ankiconnect.errors import AnkiConnectError
from ankiconnect.logging_config import setup_logging
from ankiconnect.schemas import NoteInput, NoteOptions

logger = logging.getLogger(__name__)


def _parse_fields(pairs: Sequence[str]) -> dict[str, str]:
    fields = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise SystemExit(f"Invalid --field '{pair}', expected NAME=VALUE")
        fields[name] = value
    return fields


def _print_json(value: Any) -> None:
    print(json.dumps(value, ensure_ascii=False, indent=2))


def run_command(client: AnkiConnectClient, args: argparse.Namespace) -> Any:
    """Execute a parsed subcommand and return a JSON-serializable result."""
    command = args.command
    if command == "version":
        server_version = client.version()
        return {"version": server_version, "supported": server_version >= client.min_version}
    if command == "decks":
        return client.deck_names_and_ids() if args.ids else client.deck_names()
    if command == "create-deck":
        return {"deck": args.name, "id": client.create_deck(args.name)}
    if command == "delete-decks":
        client.delete_decks(args.names, cards_too=True)
        return {"deleted": args.names}
    if command == "models":
        if args.fields_of:
            return client.model_field_names(args.fields_of)
        return client.model_names()
    if command == "find-notes":
        return client.find_notes(args.query)
    if command == "notes-info":
        return [info.model_dump(by_alias=True) for info in client.notes_info(args.ids)]
    if command == "add-note":
        note = NoteInput(
            deck_name=args.deck,
            model_name=args.model,
            fields=_parse_fields(args.field),
            tags=args.tag,
            options=NoteOptions(allow_duplicate=args.allow_duplicate),
        )
        return {"id": client.add_note(note)}
    if command == "delete-notes":
        client.delete_notes(args.ids)
        return {"deleted": args.ids}
    if command == "media":
        return client.get_media_files_names(args.pattern)
    if command == "store-media":
        source = Path(args.file)
        if not source.is_file():
            raise SystemExit(f"File does not exist: {source}")
        filename = args.name or source.name
        return {"stored": client.store_media_file(filename, source.read_bytes())}
    if command == "sync":
        client.sync()
        return {"synced": True}
    if command == "exit":
        client.gui_exit_anki()
        return {"exit": "scheduled"}
    raise SystemExit(f"Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ankiconnect", description="Control Anki through AnkiConnect")
    parser.add_argument(
        "--config",
        required=False,
        default=None,
        help="Path to YAML config with an 'ankiconnect' section (defaults to ./config.yaml if present)",
    )
    parser.add_argument("--url", required=False, default=None, help="AnkiConnect URL, overrides config")
    parser.add_argument(
        "--log-level",
        required=False,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING). Use DEBUG to see every action sent.",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("version", help="Show the AnkiConnect API version")

    decks = sub.add_parser("decks", help="List deck names")
    decks.add_argument("--ids", action="store_true", help="Include deck ids")

    create_deck = sub.add_parser("create-deck", help="Create an empty deck")
    create_deck.add_argument("name")

    delete_decks = sub.add_parser("delete-decks", help="Delete decks and their cards")
    delete_decks.add_argument("names", nargs="+")

    models = sub.add_parser("models", help="List note type names")
    models.add_argument("--fields-of", default=None, metavar="MODEL", help="List the fields of a note type instead")

    find_notes = sub.add_parser("find-notes", help="Find note ids by search query")
    find_notes.add_argument("query")

    notes_info = sub.add_parser("notes-info", help="Show notes by id")
    notes_info.add_argument("ids", nargs="+", type=int)

    add_note = sub.add_parser("add-note", help="Add a note")
    add_note.add_argument("--deck", required=True)
    add_note.add_argument("--model", default="Basic")
    add_note.add_argument("--field", action="append", default=[], metavar="NAME=VALUE")
    add_note.add_argument("--tag", action="append", default=[])
    add_note.add_argument("--allow-duplicate", action="store_true")

    delete_notes = sub.add_parser("delete-notes", help="Delete notes by id")
    delete_notes.add_argument("ids", nargs="+", type=int)

    media = sub.add_parser("media", help="List media file names")
    media.add_argument("--pattern", default="*")

    store_media = sub.add_parser("store-media", help="Upload a local file to the media folder")
    store_media.add_argument("file")
    store_media.add_argument("--name", default=None, help="Filename to store under (defaults to the file's name)")

    sub.add_parser("sync", help="Synchronize the collection with AnkiWeb")
    sub.add_parser("exit", help="Gracefully close Anki")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    if args.url:
        config = config.model_copy(update={"url": args.url})

    client = AnkiConnectClient.from_config(config)
    logger.debug("Running command", extra={"command": args.command, "url": client.url})

    try:
        result = run_command(client, args)
    except (AnkiConnectError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _print_json(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())

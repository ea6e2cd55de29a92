"""
smartlist CLI - entry point.

Inspect the field registry, validate rule-set files, search for seed tracks
and submit smart playlists to the matching engine. Saved smart playlists can
be pulled as rule-set files, updated from an edited file, and refreshed.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.markup import escape

from smartlist.api.client import GraphQLClient
from smartlist.api.exceptions import SmartlistAPIError
from smartlist.core.config import Config, load_config
from smartlist.core.console import print_table, safe_print
from smartlist.core.output import setup_from_config
from smartlist.domain.playlists.fields import CATEGORY_LABELS, get_fields_by_category
from smartlist.domain.playlists.rules import SmartRuleSet
from smartlist.domain.playlists.serialization import (
    create_playlist_input,
    rule_set_from_dict,
    rule_set_to_input,
    value_to_json,
)
from smartlist.domain.playlists.validation import (
    validate_playlist_update,
    validate_rule_set,
    validate_smart_playlist,
)


def _format_bounds(config) -> str:
    if config.min is None and config.max is None:
        return ""
    low = "" if config.min is None else f"{config.min:g}"
    high = "" if config.max is None else f"{config.max:g}"
    unit = f" {config.unit}" if config.unit else ""
    return f"{low}..{high}{unit}"


def run_fields() -> int:
    """Print the field registry grouped by category."""
    for category, configs in get_fields_by_category().items():
        if not configs:
            continue
        print_table(
            CATEGORY_LABELS[category],
            ("Field", "Label", "Type", "Operators", "Bounds"),
            (
                (
                    config.field,
                    config.label,
                    config.value_type,
                    ", ".join(config.operators),
                    _format_bounds(config),
                )
                for config in configs
            ),
        )
    return 0


def load_rule_set(path: Path) -> SmartRuleSet:
    """Read a rule set from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or not a rule set
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
    return rule_set_from_dict(data)


def run_validate(path: Path, config: Config, name: Optional[str] = None) -> int:
    """Validate a rule-set file and print the payload that would be sent."""
    try:
        rule_set = load_rule_set(path)
    except (OSError, ValueError) as e:
        safe_print(f"❌ {escape(str(e))}", style="red", error=True)
        return 1

    if name is not None:
        error = validate_smart_playlist(name, "", rule_set, config.limits)
    else:
        error = validate_rule_set(rule_set, config.limits)

    if error:
        safe_print(f"❌ {error.field}: {escape(error.message)}", style="red", error=True)
        return 1

    payload = create_playlist_input(name or "", "", False, rule_set)["smartRules"]
    safe_print(f"✓ {len(rule_set.rules)} rule(s) valid", style="green", error=True)
    print(json.dumps(payload, indent=2))
    return 0


def run_search(query: str, config: Config) -> int:
    """Search for seed tracks and print them."""
    query = query.strip()
    if len(query) < config.search.min_query_length:
        safe_print(
            f"Query must be at least {config.search.min_query_length} characters",
            style="yellow",
            error=True,
        )
        return 1

    client = GraphQLClient(config.api)
    try:
        results = client.search_tracks(query, config.search.result_limit)
    except SmartlistAPIError as e:
        safe_print(f"❌ Search failed: {escape(str(e))}", style="red", error=True)
        return 1

    if not results:
        safe_print(f"No tracks match '{escape(query)}'", style="dim")
        return 0

    print_table(
        f"Tracks matching '{query}'",
        ("ID", "Title", "Artist", "Album", "Duration"),
        (
            (
                r.id,
                r.title,
                r.artist.name if r.artist else "",
                r.album.title if r.album else "",
                r.formatted_duration,
            )
            for r in results
        ),
    )
    return 0


def run_seeds(config: Config) -> int:
    """Pick seed tracks interactively and print them as a similar_to value."""
    from smartlist.ui.seed_picker import run_seed_picker

    client = GraphQLClient(config.api)
    value = run_seed_picker(client, config)
    print(json.dumps(value_to_json(value)))
    return 0


def run_submit(
    path: Path,
    config: Config,
    name: str,
    description: str = "",
    is_public: bool = False,
) -> int:
    """Validate a rule-set file and create the smart playlist."""
    try:
        rule_set = load_rule_set(path)
    except (OSError, ValueError) as e:
        safe_print(f"❌ {escape(str(e))}", style="red", error=True)
        return 1

    error = validate_smart_playlist(name, description, rule_set, config.limits)
    if error:
        safe_print(f"❌ {error.field}: {escape(error.message)}", style="red", error=True)
        return 1

    client = GraphQLClient(config.api)
    try:
        result = client.create_smart_playlist(name, description, is_public, rule_set)
    except SmartlistAPIError as e:
        logger.error(f"Smart playlist submission failed: {e}")
        safe_print(f"❌ Could not create playlist: {escape(str(e))}", style="red", error=True)
        return 1

    count = f" ({result.track_count} tracks)" if result.track_count is not None else ""
    safe_print(f"✓ Created smart playlist '{escape(result.name)}'{count}", style="green")
    return 0


def run_pull(playlist_id: str, config: Config, output: Optional[Path] = None) -> int:
    """Download a smart playlist's rules as a rule-set JSON file for editing."""
    client = GraphQLClient(config.api)
    try:
        detail, rule_set = client.get_smart_playlist(playlist_id)
    except SmartlistAPIError as e:
        safe_print(f"❌ Could not load playlist: {escape(str(e))}", style="red", error=True)
        return 1

    text = json.dumps(rule_set_to_input(rule_set), indent=2)
    if output is None:
        print(text)
        return 0

    try:
        output.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        safe_print(f"❌ {escape(str(e))}", style="red", error=True)
        return 1
    safe_print(
        f"✓ Saved {len(rule_set.rules)} rule(s) of '{escape(detail.name)}' to {escape(str(output))}",
        style="green",
    )
    return 0


def run_update(
    playlist_id: str,
    path: Path,
    config: Config,
    name: Optional[str] = None,
    description: Optional[str] = None,
    is_public: Optional[bool] = None,
) -> int:
    """Validate an edited rule-set file and save it to an existing smart playlist."""
    try:
        rule_set = load_rule_set(path)
    except (OSError, ValueError) as e:
        safe_print(f"❌ {escape(str(e))}", style="red", error=True)
        return 1

    error = validate_playlist_update(rule_set, config.limits, name, description)
    if error:
        safe_print(f"❌ {error.field}: {escape(error.message)}", style="red", error=True)
        return 1

    client = GraphQLClient(config.api)
    try:
        result = client.update_smart_playlist(
            playlist_id, rule_set, name, description, is_public
        )
    except SmartlistAPIError as e:
        logger.error(f"Smart playlist update failed: {e}")
        safe_print(f"❌ Could not update playlist: {escape(str(e))}", style="red", error=True)
        return 1

    safe_print(f"✓ Updated smart playlist '{escape(result.name)}'", style="green")
    return 0


def run_refresh(playlist_id: str, config: Config) -> int:
    """Re-evaluate a smart playlist against the current library."""
    client = GraphQLClient(config.api)
    try:
        result = client.refresh_smart_playlist(playlist_id)
    except SmartlistAPIError as e:
        safe_print(f"❌ Could not refresh playlist: {escape(str(e))}", style="red", error=True)
        return 1

    count = f" ({result.track_count} tracks)" if result.track_count is not None else ""
    safe_print(f"✓ Refreshed smart playlist {escape(result.id)}{count}", style="green")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartlist",
        description="smartlist - Smart playlist rule editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug output to stderr"
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to config.toml"
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    subparsers.add_parser("fields", help="List filterable fields and their operators")

    validate_parser = subparsers.add_parser("validate", help="Validate a rule-set JSON file")
    validate_parser.add_argument("file", type=Path, help="Rule-set JSON file")
    validate_parser.add_argument("--name", help="Also validate a playlist name")

    search_parser = subparsers.add_parser("search", help="Search tracks to use as seeds")
    search_parser.add_argument("query", nargs="+", help="Search text")

    subparsers.add_parser("seeds", help="Pick seed tracks interactively")

    submit_parser = subparsers.add_parser("submit", help="Create a smart playlist")
    submit_parser.add_argument("file", type=Path, help="Rule-set JSON file")
    submit_parser.add_argument("--name", required=True, help="Playlist name")
    submit_parser.add_argument("--description", default="", help="Playlist description")
    submit_parser.add_argument(
        "--public", action="store_true", help="Make the playlist public"
    )

    pull_parser = subparsers.add_parser(
        "pull", help="Download a saved smart playlist's rules for editing"
    )
    pull_parser.add_argument("playlist_id", help="Playlist ID")
    pull_parser.add_argument(
        "--output", "-o", type=Path, default=None, help="Write to a file instead of stdout"
    )

    update_parser = subparsers.add_parser(
        "update", help="Save an edited rule-set file to a smart playlist"
    )
    update_parser.add_argument("playlist_id", help="Playlist ID")
    update_parser.add_argument("file", type=Path, help="Rule-set JSON file")
    update_parser.add_argument("--name", default=None, help="New playlist name")
    update_parser.add_argument("--description", default=None, help="New description")
    visibility = update_parser.add_mutually_exclusive_group()
    visibility.add_argument(
        "--public",
        dest="is_public",
        action="store_const",
        const=True,
        default=None,
        help="Make the playlist public",
    )
    visibility.add_argument(
        "--private",
        dest="is_public",
        action="store_const",
        const=False,
        help="Make the playlist private",
    )

    refresh_parser = subparsers.add_parser(
        "refresh", help="Re-evaluate a smart playlist against the library"
    )
    refresh_parser.add_argument("playlist_id", help="Playlist ID")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the smartlist command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.subcommand:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    setup_from_config(config.logging, verbose=args.verbose)

    if args.subcommand == "fields":
        sys.exit(run_fields())

    elif args.subcommand == "validate":
        sys.exit(run_validate(args.file, config, name=args.name))

    elif args.subcommand == "search":
        sys.exit(run_search(" ".join(args.query), config))

    elif args.subcommand == "seeds":
        sys.exit(run_seeds(config))

    elif args.subcommand == "submit":
        sys.exit(
            run_submit(
                args.file,
                config,
                name=args.name,
                description=args.description,
                is_public=args.public,
            )
        )

    elif args.subcommand == "pull":
        sys.exit(run_pull(args.playlist_id, config, output=args.output))

    elif args.subcommand == "update":
        sys.exit(
            run_update(
                args.playlist_id,
                args.file,
                config,
                name=args.name,
                description=args.description,
                is_public=args.is_public,
            )
        )

    elif args.subcommand == "refresh":
        sys.exit(run_refresh(args.playlist_id, config))


if __name__ == "__main__":
    main()

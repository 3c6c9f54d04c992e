"""CLI entrypoint for chronos."""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from datetime import date

from pydantic import ValidationError

from chronos import __version__
from chronos.booking.draft import BookingError, find_favorite, merge_draft, select_entry
from chronos.catalog.cache import CacheError, CacheNotSynchronizedError, ProjectCache
from chronos.catalog.client import CatalogError, CoffeeCupClient
from chronos.catalog.sync import CacheSynchronizer, RemoteFetchError
from chronos.credentials.config import ResolvedConfig
from chronos.credentials.errors import (
    ConfigError,
    GetPasswordError,
    NoPasswordError,
    SetPasswordError,
)
from chronos.credentials.resolver import CredentialResolver
from chronos.credentials.secret_store import KeyringSecretStore
from chronos.logging import configure_logging
from chronos.settings import ChronosSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chronos",
        description="Book time in CoffeeCup from the command line",
    )
    parser.add_argument("--version", action="version", version=f"chronos {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("login", help="Store your CoffeeCup password in the system keyring")

    subparsers.add_parser("sync", help="Refresh the local cache of bookable projects and tasks")

    projects = subparsers.add_parser("projects", help="List cached projects and tasks")
    projects.add_argument(
        "--match",
        default=None,
        help="Only show entries whose label contains this text",
    )

    book = subparsers.add_parser("book", help="Book a time entry")
    book.add_argument(
        "--template",
        default=None,
        help="Favorite from the config file to start from (name or 1-based number)",
    )
    book.add_argument("-p", "--project", type=int, default=None, help="Project id")
    book.add_argument("--task", type=int, default=None, help="Task id")
    book.add_argument("--duration", type=int, default=None, help="Duration in minutes")
    book.add_argument("-r", "--reference", default=None, help="External reference, e.g. a ticket")
    book.add_argument("-c", "--comment", default=None, help="Comment for the time entry")
    book.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Day to book (YYYY-MM-DD, defaults to today)",
    )
    book.add_argument(
        "--match",
        default=None,
        help="Pick the project/task by label text instead of ids, e.g. 'Website / Design'",
    )
    book.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the time entry instead of submitting it",
    )

    return parser


def _client(settings: ChronosSettings, config: ResolvedConfig) -> CoffeeCupClient:
    return CoffeeCupClient(
        user_name=config.user_name,
        password=config.password.get_secret_value(),
        base_url=settings.base_url,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ChronosSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment and .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    resolver = CredentialResolver(settings=settings, secret_store=KeyringSecretStore())
    store = ProjectCache(settings.cache_path)

    try:
        if args.command == "login":
            config = resolver.load()
            new_password = getpass.getpass(f"Enter password for user {config.user_name}: ")
            if not new_password:
                print("No password entered; nothing stored", file=sys.stderr)
                return 2
            resolver.persist_secret(config, new_password)
            print(f"Password for {config.user_name} stored in the system keyring")
            return 0

        if args.command == "sync":
            resolved = resolver.resolve()
            client = _client(settings, resolved)
            try:
                client.authenticate()
                entries = CacheSynchronizer(catalog=client, store=store).synchronize()
            finally:
                client.close()
            print(f"Cached {len(entries)} bookable entries in {store.path}")
            return 0

        if args.command == "projects":
            entries = store.search(args.match) if args.match else store.load()
            for entry in entries:
                print(f"{entry.project}/{entry.task}\t{entry.display}")
            return 0

        if args.command == "book":
            favorite = None
            if args.template:
                favorite = find_favorite(resolver.load().favorites, args.template)
            draft = merge_draft(
                favorite,
                project=args.project,
                task=args.task,
                duration=args.duration,
                comment=args.comment,
                reference=args.reference,
                day=args.date,
            )
            entry = select_entry(store.load(), draft, match=args.match)
            draft = draft.model_copy(update={"project": entry.project, "task": entry.task})
            draft.require_complete()

            summary = f"{draft.day.isoformat()} {draft.duration}min {entry.display}"
            if draft.comment:
                summary += f" ({draft.comment})"

            if args.dry_run:
                print(f"Would book: {summary}")
                return 0

            resolved = resolver.resolve()
            client = _client(settings, resolved)
            try:
                entry_id = client.create_time_entry(draft)
            finally:
                client.close()
            print(f"Booked #{entry_id}: {summary}")
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (NoPasswordError, CacheNotSynchronizedError) as e:
        print(str(e), file=sys.stderr)
        return 3

    except (GetPasswordError, SetPasswordError) as e:
        logger.info(str(e), extra={"command": args.command})
        print(str(e), file=sys.stderr)
        return 1

    except ConfigError as e:
        print(str(e), file=sys.stderr)
        return 2

    except (CacheError, BookingError, CatalogError, RemoteFetchError) as e:
        logger.info(str(e), extra={"command": args.command})
        print(str(e), file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

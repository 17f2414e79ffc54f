from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Iterable

import aiohttp

from .client import ThreadClient, connect
from .config import core, threads as threads_cfg
from .errors import InvalidArgumentError
from .models import FetchedThreads, Thread
from .resolvers import isoformat

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    ivalue = int(value)
    if ivalue <= 0:
        raise argparse.ArgumentTypeError("value must be a positive integer")
    return ivalue


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m threadkeeper",
        description="List and create Discord threads under a channel.",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="Discord bot token. Defaults to the value resolved from config/env.",
    )
    parser.add_argument(
        "--token-env",
        type=str,
        default=None,
        help="Environment variable that stores the Discord token (overrides config).",
    )
    subparsers = parser.add_subparsers(
        dest="command", metavar="<command>", required=True
    )

    active_cmd = subparsers.add_parser(
        "active", help="List active threads belonging to a channel."
    )
    active_cmd.add_argument("channel", type=int, help="Parent channel ID.")

    archived_cmd = subparsers.add_parser(
        "archived", help="List one page of archived threads for a channel."
    )
    archived_cmd.add_argument("channel", type=int, help="Parent channel ID.")
    archived_cmd.add_argument(
        "--private",
        action="store_true",
        help="List private archived threads instead of public ones.",
    )
    archived_cmd.add_argument(
        "--fetch-all",
        action="store_true",
        help="With --private, list every private thread (needs Manage Threads).",
    )
    archived_cmd.add_argument(
        "--before",
        type=str,
        default=None,
        help="Thread ID or ISO-8601 timestamp to page from.",
    )
    archived_cmd.add_argument(
        "--limit",
        type=_positive_int,
        default=threads_cfg.DEFAULT_ARCHIVE_LIMIT,
        help="Maximum threads to return (default: %(default)s).",
    )

    create_cmd = subparsers.add_parser("create", help="Create a thread in a channel.")
    create_cmd.add_argument("channel", type=int, help="Parent channel ID.")
    create_cmd.add_argument("name", type=str, help="Thread name.")
    create_cmd.add_argument(
        "--private", action="store_true", help="Create a private thread."
    )
    create_cmd.add_argument(
        "--start-message",
        type=str,
        default=None,
        help="Message ID to start the thread from.",
    )
    create_cmd.add_argument(
        "--auto-archive",
        type=_positive_int,
        default=None,
        help="Auto-archive duration in minutes (defaults to the channel's).",
    )
    create_cmd.add_argument(
        "--reason", type=str, default=None, help="Audit log reason."
    )
    return parser


def _resolve_token(args: argparse.Namespace) -> str | None:
    if args.token:
        return args.token
    if args.token_env:
        return os.getenv(args.token_env)
    return core.DISCORD_API_TOKEN


def format_thread(thread: Thread) -> str:
    archived = f" archived {isoformat(thread.archived_at)}" if thread.archived_at else ""
    return f"  - {thread.name} ({thread.id}) [{thread.type.name}]{archived}"


def format_listing(result: FetchedThreads) -> Iterable[str]:
    if not result.threads:
        yield "  (no threads)"
    for thread in result.threads.values():
        yield format_thread(thread)
    if result.has_more:
        yield "  ... more available"


async def run_command(client: ThreadClient, args: argparse.Namespace) -> list[str]:
    parent = await client.fetch_parent(args.channel)
    lines = [f"Channel: {parent.name or parent.id} ({parent.id})"]

    if args.command == "active":
        result = await parent.threads.fetch_active()
        lines.extend(format_listing(result))
    elif args.command == "archived":
        result = await parent.threads.fetch_archived(
            type="private" if args.private else "public",
            fetch_all=args.fetch_all,
            before=args.before,
            limit=args.limit,
        )
        lines.extend(format_listing(result))
    elif args.command == "create":
        options = {
            "start_message": args.start_message,
            "type": "private_thread" if args.private else None,
            "reason": args.reason,
        }
        if args.auto_archive:
            options["auto_archive_duration"] = args.auto_archive
        thread = await parent.threads.create(args.name, **options)
        lines.append(format_thread(thread))
    return lines


async def _run(token: str, args: argparse.Namespace) -> list[str]:
    async with connect(token) as client:
        return await run_command(client, args)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    token = _resolve_token(args)
    if not token:
        parser.error(
            f"Discord token missing. Provide --token or export {args.token_env or core.TOKEN_ENV}."
        )

    try:
        lines = asyncio.run(_run(token, args))
    except InvalidArgumentError as exc:
        parser.error(str(exc))
    except aiohttp.ClientResponseError as exc:
        logger.error("Discord rejected the request: %s %s", exc.status, exc.message)
        raise SystemExit(1) from exc
    except aiohttp.ClientError as exc:
        logger.error("Request failed: %s", exc)
        raise SystemExit(1) from exc

    for line in lines:
        print(line)


__all__ = ["build_parser", "main", "run_command"]

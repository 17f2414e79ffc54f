import asyncio

import pytest

from threadkeeper import cli
from threadkeeper.cli import build_parser, run_command
from threadkeeper.client import ThreadClient
from threadkeeper.config import core

GUILD_ID = 100000000000000000
CHANNEL_ID = 100000000000000001


class FakeRest:
    def __init__(self, responses):
        self.calls = []
        self.responses = responses

    async def get(self, path, *, query=None):
        self.calls.append(("GET", path, dict(query or {})))
        return self.responses[path]

    async def post(self, path, *, body=None, reason=None):
        self.calls.append(("POST", path, dict(body or {}), reason))
        return {
            "id": "300000000000000009",
            "type": body["type"],
            "name": body["name"],
            "parent_id": str(CHANNEL_ID),
        }

    async def close(self):
        pass


def _responses(**extra):
    responses = {
        f"/channels/{CHANNEL_ID}": {
            "id": str(CHANNEL_ID),
            "guild_id": str(GUILD_ID),
            "type": 0,
            "name": "general",
            "default_auto_archive_duration": 60,
        }
    }
    responses.update(extra)
    return responses


def test_archived_command_pages_private_threads():
    path = f"/channels/{CHANNEL_ID}/users/@me/threads/archived/private"
    rest = FakeRest(
        _responses(
            **{
                path: {
                    "threads": [
                        {
                            "id": "300000000000000001",
                            "type": 12,
                            "name": "secret",
                            "parent_id": str(CHANNEL_ID),
                            "thread_metadata": {
                                "archived": True,
                                "archive_timestamp": "2023-01-01T00:00:00+00:00",
                            },
                        }
                    ],
                    "members": [],
                    "has_more": True,
                }
            }
        )
    )
    args = build_parser().parse_args(
        ["archived", str(CHANNEL_ID), "--private", "--before", "300000000000000005", "--limit", "10"]
    )

    lines = asyncio.run(run_command(ThreadClient(rest=rest), args))

    assert rest.calls[-1] == ("GET", path, {"limit": 10, "before": "300000000000000005"})
    assert lines == [
        f"Channel: general ({CHANNEL_ID})",
        "  - secret (300000000000000001) [private_thread] archived 2023-01-01T00:00:00.000Z",
        "  ... more available",
    ]


def test_active_command_reports_empty_listing():
    rest = FakeRest(_responses(**{f"/guilds/{GUILD_ID}/threads/active": {"threads": [], "members": []}}))
    args = build_parser().parse_args(["active", str(CHANNEL_ID)])

    lines = asyncio.run(run_command(ThreadClient(rest=rest), args))

    assert lines[-1] == "  (no threads)"


def test_create_command_uses_channel_default_archive_duration():
    rest = FakeRest(_responses())
    args = build_parser().parse_args(["create", str(CHANNEL_ID), "mod-talk", "--private", "--reason", "mods"])

    lines = asyncio.run(run_command(ThreadClient(rest=rest), args))

    assert rest.calls[-1] == (
        "POST",
        f"/channels/{CHANNEL_ID}/threads",
        {"name": "mod-talk", "auto_archive_duration": 60, "type": 12},
        "mods",
    )
    assert lines[-1] == "  - mod-talk (300000000000000009) [private_thread]"


def test_parser_rejects_non_positive_limit():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["archived", str(CHANNEL_ID), "--limit", "0"])


def test_main_requires_token(monkeypatch):
    monkeypatch.setattr(core, "DISCORD_API_TOKEN", None)

    with pytest.raises(SystemExit):
        cli.main(["active", str(CHANNEL_ID)])

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from threadkeeper.transport import RestClient


async def _start(app):
    server = TestServer(app)
    await server.start_server()
    return server


@pytest.mark.asyncio
async def test_get_sends_token_and_encodes_query():
    seen = {}

    async def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["query"] = dict(request.query)
        return web.json_response({"threads": [], "members": [], "has_more": False})

    app = web.Application()
    app.router.add_get("/api/v10/channels/1/threads/archived/public", handler)
    server = await _start(app)
    try:
        async with RestClient("secret", api_base=str(server.make_url("/api/v10"))) as rest:
            data = await rest.get(
                "/channels/1/threads/archived/public",
                query={"limit": 50, "before": None, "flag": True},
            )
    finally:
        await server.close()

    assert data == {"threads": [], "members": [], "has_more": False}
    assert seen["auth"] == "Bot secret"
    assert seen["query"] == {"limit": "50", "flag": "true"}


@pytest.mark.asyncio
async def test_post_sends_json_body_and_audit_reason():
    seen = {}

    async def handler(request):
        seen["body"] = await request.json()
        seen["reason"] = request.headers.get("X-Audit-Log-Reason")
        return web.json_response({"id": "300000000000000001", "type": 11})

    app = web.Application()
    app.router.add_post("/api/v10/channels/1/threads", handler)
    server = await _start(app)
    try:
        async with RestClient("secret", api_base=str(server.make_url("/api/v10"))) as rest:
            data = await rest.post(
                "/channels/1/threads",
                body={"name": "food-talk", "type": 11},
                reason="needed a thread",
            )
    finally:
        await server.close()

    assert data["id"] == "300000000000000001"
    assert seen["body"] == {"name": "food-talk", "type": 11}
    assert seen["reason"] == "needed%20a%20thread"


@pytest.mark.asyncio
async def test_error_responses_propagate_as_client_errors():
    async def handler(request):
        return web.json_response({"message": "Missing Access", "code": 50001}, status=403)

    app = web.Application()
    app.router.add_get("/api/v10/guilds/1/threads/active", handler)
    server = await _start(app)
    try:
        async with RestClient("secret", api_base=str(server.make_url("/api/v10"))) as rest:
            with pytest.raises(aiohttp.ClientResponseError) as excinfo:
                await rest.get("/guilds/1/threads/active")
    finally:
        await server.close()

    assert excinfo.value.status == 403


@pytest.mark.asyncio
async def test_injected_session_is_left_open():
    async with aiohttp.ClientSession() as session:
        rest = RestClient("secret", session=session)
        await rest.close()
        assert session.closed is False

"""Tests for the Admin API client."""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from pydantic import ValidationError

from redspawn.errors import AdminAPIError
from redspawn.redpanda.admin import AdminAPIClient, ClusterHealthOverview


@pytest.mark.asyncio
async def test_create_user_posts_credentials():
    """Test the user creation request body."""
    received = []

    async def create_user(request):
        received.append(await request.json())
        return web.json_response({})

    app = web.Application()
    app.router.add_post("/v1/security/users", create_user)
    server = TestServer(app)
    await server.start_server()

    try:
        async with AdminAPIClient(f"http://{server.host}:{server.port}") as admin:
            await admin.create_user("alice", "secret")
    finally:
        await server.close()

    assert received == [{"username": "alice", "password": "secret", "algorithm": "SCRAM-SHA-256"}]


@pytest.mark.asyncio
async def test_create_user_http_error():
    """Test that error responses raise AdminAPIError with the status code."""
    async def create_user(request):
        return web.Response(status=409, text="user already exists")

    app = web.Application()
    app.router.add_post("/v1/security/users", create_user)
    server = TestServer(app)
    await server.start_server()

    try:
        async with AdminAPIClient(f"http://{server.host}:{server.port}") as admin:
            with pytest.raises(AdminAPIError) as exc_info:
                await admin.create_user("alice", "secret")
    finally:
        await server.close()

    assert exc_info.value.status_code == 409
    assert "user already exists" in str(exc_info.value)


@pytest.mark.asyncio
async def test_create_user_connection_error(unused_tcp_port):
    """Test that connection failures raise AdminAPIError."""
    async with AdminAPIClient(f"http://127.0.0.1:{unused_tcp_port}", timeout=1.0) as admin:
        with pytest.raises(AdminAPIError) as exc_info:
            await admin.create_user("alice", "secret")

    assert exc_info.value.status_code is None
    assert "Connection error" in str(exc_info.value)


@pytest.mark.asyncio
async def test_health_overview():
    """Test parsing the health overview."""
    bodies = [
        {"is_healthy": True, "controller_id": 0, "all_nodes": [0], "nodes_down": [],
         "leaderless_partitions": [], "under_replicated_partitions": []},
        {"controller_id": 0},
    ]

    async def health_overview(request):
        return web.json_response(bodies.pop(0))

    app = web.Application()
    app.router.add_get("/v1/cluster/health_overview", health_overview)
    server = TestServer(app)
    await server.start_server()

    try:
        async with AdminAPIClient(f"http://{server.host}:{server.port}") as admin:
            overview = await admin.health_overview()
            assert overview.is_healthy is True
            assert overview.all_nodes == [0]

            with pytest.raises(ValidationError):
                await admin.health_overview()
    finally:
        await server.close()


@pytest.mark.parametrize("body", [
    '{"is_healthy": "true"}',
    '{"is_healthy": 1}',
    '{"is_healthy": "yes"}',
    '{"is_healthy": null}',
])
def test_health_overview_requires_boolean(body):
    """Test that is_healthy only accepts a JSON boolean."""
    with pytest.raises(ValidationError):
        ClusterHealthOverview.model_validate_json(body)

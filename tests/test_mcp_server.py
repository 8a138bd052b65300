"""Tests for the MCP bridge over the fronts store."""

import json

import pytest

from mcp.shared.memory import create_connected_server_and_client_session

import backend.mcp_server as mcp_server
from backend.demo import create_demo_data
from backend import storage


async def _call(tool: str, arguments: dict):
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        return await client.call_tool(tool, arguments)


@pytest.mark.asyncio
async def test_get_fronts():
    create_demo_data()
    result = await _call("get_fronts", {})
    assert not result.isError
    data = json.loads(result.content[0].text)
    assert data["fronts"][0]["name"] == "The Hollow King"


@pytest.mark.asyncio
async def test_toggle_secret_writes_through():
    create_demo_data()
    result = await _call(
        "toggle_secret",
        {"danger_id": "danger-demo-cult-of-ash", "secret_id": "secret-demo-1"},
    )
    assert not result.isError
    assert json.loads(result.content[0].text)["revealed"] is True
    assert storage.get_fronts()[0]["dangers"][0]["secrets"][0]["revealed"] is True


@pytest.mark.asyncio
async def test_toggle_portent():
    create_demo_data()
    result = await _call(
        "toggle_portent",
        {"danger_id": "danger-demo-cult-of-ash", "portent_id": "portent-demo-1"},
    )
    assert json.loads(result.content[0].text)["completed"] is True


@pytest.mark.asyncio
async def test_unknown_entity_is_tool_error():
    create_demo_data()
    result = await _call("toggle_secret", {"danger_id": "nope", "secret_id": "nope"})
    assert result.isError

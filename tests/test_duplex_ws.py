import asyncio
import contextlib
import io

import pytest
from aiohttp import test_utils

from codekata.duplex_ws import Hub, create_duplex_app, run_client


class _Recorder:
    def __init__(self):
        self.sent = []

    async def send_str(self, message):
        self.sent.append(message)


class _Broken:
    async def send_str(self, message):
        raise ConnectionResetError("gone")


async def _wait_for(condition, timeout=5.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)


@contextlib.asynccontextmanager
async def _client(app):
    async with test_utils.TestClient(test_utils.TestServer(app)) as client:
        yield client


def test_register_and_unregister():
    hub = Hub()
    client = _Recorder()
    hub.register(client)
    assert client in hub
    assert len(hub) == 1
    hub.unregister(client)
    hub.unregister(client)
    assert client not in hub
    assert len(hub) == 0


@pytest.mark.asyncio
async def test_broadcast_reaches_every_client():
    hub = Hub()
    clients = [_Recorder(), _Recorder(), _Recorder()]
    for client in clients:
        hub.register(client)
    delivered = await hub.broadcast("news")
    assert delivered == len(clients)
    assert all(client.sent == ["news"] for client in clients)


@pytest.mark.asyncio
async def test_broadcast_drops_failing_clients():
    hub = Hub()
    good, bad = _Recorder(), _Broken()
    hub.register(good)
    hub.register(bad)
    delivered = await hub.broadcast("hello")
    assert delivered == 1
    assert bad not in hub
    assert good.sent == ["hello"]


@pytest.mark.asyncio
async def test_messages_relay_to_all_connected_clients():
    hub = Hub()
    async with _client(create_duplex_app(hub)) as client:
        first = await client.ws_connect("/ws")
        await first.send_str("one")
        assert await first.receive_str() == "one"

        second = await client.ws_connect("/ws")
        await second.send_str("two")
        assert await second.receive_str() == "two"
        assert await first.receive_str() == "two"

        await first.send_str("three")
        assert await first.receive_str() == "three"
        assert await second.receive_str() == "three"
        assert len(hub) == 2

        await first.close()
        await second.close()
        await _wait_for(lambda: len(hub) == 0)
    assert len(hub) == 0


@pytest.mark.asyncio
async def test_run_client_sends_lines_and_records_replies():
    hub = Hub()
    server = test_utils.TestServer(create_duplex_app(hub))
    await server.start_server()
    output = io.StringIO()
    try:
        task = asyncio.create_task(
            run_client(str(server.make_url("/ws")), ["alpha\n", "beta"], output)
        )
        await _wait_for(lambda: output.getvalue().count("\n") == 2)
    finally:
        await server.close()
    count = await asyncio.wait_for(task, 5)
    assert count == 2
    assert output.getvalue() == "Received: alpha\nReceived: beta\n"
"""A WebSocket chat hub that relays every message to all clients, and a console client."""

import argparse
import asyncio
import contextlib
import logging
import sys
import threading

import aiohttp
from aiohttp import web

_log = logging.getLogger(__name__)
_END = object()


class Hub:
    """The set of connected clients; each needs an awaitable ``send_str``."""

    def __init__(self):
        self._clients = set()

    def register(self, client):
        self._clients.add(client)

    def unregister(self, client):
        self._clients.discard(client)

    def __len__(self):
        return len(self._clients)

    def __contains__(self, client):
        return client in self._clients

    async def broadcast(self, message):
        """Send ``message`` to every client, dropping those that fail; return deliveries."""
        delivered = 0
        for client in list(self._clients):
            try:
                await client.send_str(message)
            except (ConnectionError, RuntimeError) as exc:
                _log.warning("Write error: %s", exc)
                self.unregister(client)
            else:
                delivered += 1
        return delivered

    async def close_all(self):
        for client in list(self._clients):
            with contextlib.suppress(ConnectionError, RuntimeError):
                await client.close(code=aiohttp.WSCloseCode.GOING_AWAY)


def create_duplex_app(hub=None):
    """Build an app whose /ws endpoint relays each message to every client of ``hub``."""
    hub = Hub() if hub is None else hub

    async def connections(request):
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        hub.register(ws)
        try:
            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    await hub.broadcast(msg.data)
                elif msg.type == aiohttp.WSMsgType.BINARY:
                    await hub.broadcast(msg.data.decode("utf-8", errors="replace"))
                elif msg.type == aiohttp.WSMsgType.ERROR:
                    _log.warning("Read error: %s", ws.exception())
                    break
        finally:
            hub.unregister(ws)
        return ws

    async def close_clients(app):
        await hub.close_all()

    app = web.Application()
    app.router.add_get("/ws", connections)
    app.on_shutdown.append(close_clients)
    return app


def _pump(lines, loop, queue):
    try:
        for line in lines:
            loop.call_soon_threadsafe(queue.put_nowait, line)
        loop.call_soon_threadsafe(queue.put_nowait, _END)
    except RuntimeError:
        return


async def run_client(url, lines, output):
    """Send each of ``lines`` while writing every received message to ``output``.

    Runs until the server closes the connection; returns the number of messages received.
    """
    loop = asyncio.get_running_loop()
    pending = asyncio.Queue()
    threading.Thread(target=_pump, args=(lines, loop, pending), daemon=True).start()
    received = 0
    async with aiohttp.ClientSession() as session:
        async with session.ws_connect(url) as ws:

            async def write():
                while (line := await pending.get()) is not _END:
                    try:
                        await ws.send_str(line.rstrip("\n"))
                    except (ConnectionError, RuntimeError) as exc:
                        _log.warning("Write error: %s", exc)
                        return

            writer = asyncio.create_task(write())
            try:
                async for msg in ws:
                    if msg.type == aiohttp.WSMsgType.TEXT:
                        output.write(f"Received: {msg.data}\n")
                        received += 1
                    elif msg.type == aiohttp.WSMsgType.ERROR:
                        _log.warning("Read error: %s", ws.exception())
                        break
            finally:
                writer.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await writer
    return received


def main(argv=None):
    parser = argparse.ArgumentParser(description="Full-duplex WebSocket chat.")
    commands = parser.add_subparsers(dest="command", required=True)
    serve = commands.add_parser("serve")
    serve.add_argument("--port", type=int, default=8080)
    connect = commands.add_parser("connect")
    connect.add_argument("--url", default="ws://localhost:8080/ws")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    if args.command == "serve":
        print(f"Server started on :{args.port}")
        web.run_app(create_duplex_app(), port=args.port, print=None)
        return 0
    try:
        asyncio.run(run_client(args.url, sys.stdin, sys.stdout))
    except aiohttp.ClientError as exc:
        print(f"Dial error: {exc}", file=sys.stderr)
        return 1
    return 0
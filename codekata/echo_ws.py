"""A WebSocket echo server with optional static files, and a one-shot client."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import aiohttp
from aiohttp import web

_log = logging.getLogger(__name__)


async def _echo(request):
    ws = web.WebSocketResponse()
    await ws.prepare(request)
    _log.info("Client connected")
    async for msg in ws:
        if msg.type == aiohttp.WSMsgType.TEXT:
            _log.info("Received: %s", msg.data)
            await ws.send_str(msg.data)
        elif msg.type == aiohttp.WSMsgType.BINARY:
            _log.info("Received %d bytes", len(msg.data))
            await ws.send_bytes(msg.data)
        elif msg.type == aiohttp.WSMsgType.ERROR:
            _log.warning("Read error: %s", ws.exception())
            break
    return ws


def _static_handler(root):
    root = Path(root).resolve()

    async def handler(request):
        target = (root / request.match_info["path"]).resolve()
        if target != root and root not in target.parents:
            raise web.HTTPNotFound()
        if target.is_dir():
            target = target / "index.html"
        if not target.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(target)

    return handler


def create_echo_app(static_dir=None):
    """Build an app echoing WebSocket messages on /ws, serving ``static_dir`` elsewhere."""
    app = web.Application()
    app.router.add_get("/ws", _echo)
    if static_dir is not None:
        app.router.add_get("/{path:.*}", _static_handler(static_dir))
    return app


async def send_and_receive(url, message):
    """Send one text message to ``url`` and return the first reply."""
    async with aiohttp.ClientSession() as session:
        async with session.ws_connect(url) as ws:
            await ws.send_str(message)
            reply = await ws.receive()
    if reply.type == aiohttp.WSMsgType.TEXT:
        return reply.data
    if reply.type == aiohttp.WSMsgType.BINARY:
        return reply.data.decode("utf-8", errors="replace")
    raise ConnectionError(f"connection closed before a reply: {reply.type.name}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="WebSocket echo server and client.")
    commands = parser.add_subparsers(dest="command", required=True)
    serve = commands.add_parser("serve")
    serve.add_argument("--port", type=int, default=8080)
    serve.add_argument("--static", default=None)
    send = commands.add_parser("send")
    send.add_argument("--url", default="ws://localhost:8080/ws")
    send.add_argument("message", nargs="?", default="Hello from client!")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    if args.command == "serve":
        print(f"Server started at :{args.port}")
        web.run_app(create_echo_app(args.static), port=args.port, print=None)
        return 0
    try:
        reply = asyncio.run(send_and_receive(args.url, args.message))
    except (aiohttp.ClientError, ConnectionError) as exc:
        print(f"Dial error: {exc}", file=sys.stderr)
        return 1
    print(f"Received from server: {reply}")
    return 0
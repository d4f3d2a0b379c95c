"""HTTP and WebSocket surface the browser talks to."""

import asyncio
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from aiohttp import WSCloseCode, WSMessage, WSMsgType, web

from browser_test_runner.aggregator import ResultAggregator
from browser_test_runner.exceptions import ProtocolError
from browser_test_runner.models.summary import SessionSummary
from browser_test_runner.reporters.base import Reporter

log = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
HARNESS_PAGE = (STATIC_DIR / "harness.html").read_text(encoding="utf-8")
DEFAULT_RUNTIME_PATH = STATIC_DIR / "runtime.js"


@dataclass(kw_only=True)
class TestServer:
    """Serves the harness page and script, and collects results over a socket.

    Only one client connection is accepted at a time. Its frames are handed
    to the session's ``ResultAggregator`` strictly in arrival order.
    """

    __test__ = False

    script: str
    runtime_script: str
    reporter: Reporter
    completion: asyncio.Future[SessionSummary]
    manual: bool = False
    host: str = "localhost"
    port: int = 3000
    output: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    aggregator: ResultAggregator = field(init=False)
    _site: web.TCPSite | None = field(default=None, init=False, repr=False)
    _connection: web.WebSocketResponse | None = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.aggregator = ResultAggregator(
            reporter=self.reporter,
            completion=self.completion,
            manual=self.manual,
            close_listener=self.close_listener,
            output=self.output,
        )

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/", self.handle_root)
        app.router.add_get("/runtime.js", self.handle_runtime)
        app.router.add_get("/tests", self.handle_tests)
        return app

    @asynccontextmanager
    async def running(self) -> AsyncGenerator["TestServer", None]:
        """Listen on the configured address for the lifetime of the context."""
        runner = web.AppRunner(self.create_app())
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        self._site = site
        log.info("Test server listening on http://%s:%d", self.host, self.port)

        try:
            yield self
        finally:
            self._site = None
            if self._connection is not None and self._connection.prepared:
                await self._connection.close(code=WSCloseCode.GOING_AWAY)
            await runner.cleanup()
            log.debug("Test server stopped")

    async def close_listener(self) -> None:
        """Stop accepting new connections, leaving open ones alone."""
        if self._site is None:
            return
        site, self._site = self._site, None
        await site.stop()
        log.debug("Test server stopped listening")

    async def handle_root(self, request: web.Request) -> web.StreamResponse:
        """Serve the harness page, or accept the client socket on upgrade."""
        ws = web.WebSocketResponse()
        if ws.can_prepare(request).ok:
            return await self.handle_socket(request, ws)

        self.aggregator.reset()
        return web.Response(text=HARNESS_PAGE, content_type="text/html")

    async def handle_runtime(self, request: web.Request) -> web.Response:
        return web.Response(text=self.runtime_script, content_type="text/javascript")

    async def handle_tests(self, request: web.Request) -> web.Response:
        return web.Response(text=self.script, content_type="text/javascript")

    async def handle_socket(
        self, request: web.Request, ws: web.WebSocketResponse
    ) -> web.StreamResponse:
        """Feed every frame of the client connection to the aggregator."""
        if self._connection is not None:
            log.warning(
                "Rejecting connection from %s: a client is already connected",
                request.remote,
            )
            raise web.HTTPConflict(text="A test client is already connected")

        self._connection = ws
        try:
            await ws.prepare(request)
            log.info("Running tests")

            async for msg in ws:
                try:
                    await self.dispatch(msg)
                except ProtocolError as e:
                    self.aggregator.fail(e)
                    await ws.close(
                        code=WSCloseCode.UNSUPPORTED_DATA, message=b"Protocol error"
                    )
                    break
        finally:
            self._connection = None

        return ws

    async def dispatch(self, msg: WSMessage) -> None:
        if msg.type is WSMsgType.TEXT:
            await self.aggregator.handle(msg.data)
        elif msg.type is WSMsgType.ERROR:
            raise ProtocolError(f"WebSocket connection failed: {msg.data}")
        else:
            raise ProtocolError(f"Unsupported WebSocket frame type: {msg.type.name}")

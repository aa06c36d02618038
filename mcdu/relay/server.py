"""WebSocket relay: network frames in, decoded screen updates onto the queue.

Routes:
  WS  /          -> one connection per simulator client; text frames
                    ``update:<json>`` are decoded and queued
  GET /health    -> {"status": "ok", "pending": n, "dropped": n}

``RelayServer`` hosts the app with uvicorn on a dedicated daemon thread, which
owns its own asyncio loop. Every connection is an independent coroutine on
that loop; a failing connection is logged and closed without touching the
listener or its siblings. The queue is the only state shared with the
consumer thread.
"""
from __future__ import annotations

import logging
import threading
import time

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from mcdu import metrics as m
from mcdu.config.runtime_config import RelaySettings
from mcdu.screen.model import DEFAULT_SIDE, ScreenUpdate
from mcdu.utils.exceptions import RelayBindError
from mcdu.version import get_version

from .frames import handle_frame
from .queue import UpdateQueue

logger = logging.getLogger(__name__)


def create_app(queue: UpdateQueue[ScreenUpdate], side: str = DEFAULT_SIDE, strict: bool = True) -> FastAPI:
    app = FastAPI(title="MCDU display relay", version=get_version())
    app.state.queue = queue

    @app.get("/health")
    async def health():
        return {"status": "ok", "pending": len(queue), "dropped": queue.dropped}

    @app.websocket("/")
    async def relay(ws: WebSocket):
        await ws.accept()
        client_id = f"{ws.client.host}:{ws.client.port}" if ws.client else "-"
        m.connections_active.inc()
        logger.info("relay: client %s connected", client_id)
        try:
            while True:
                message = await ws.receive()
                if message["type"] == "websocket.disconnect":
                    break
                text = message.get("text")
                if text is None:
                    data = message.get("bytes") or b""
                    try:
                        text = data.decode("utf-8")
                    except UnicodeDecodeError:
                        logger.debug("relay: ignoring non UTF-8 binary frame from %s", client_id)
                        continue
                handle_frame(text, queue, side=side, strict=strict, client_id=client_id)
        except WebSocketDisconnect:
            pass
        except Exception as e:
            logger.error("relay: connection %s failed: %s", client_id, e)
        finally:
            m.connections_active.dec()
            logger.info("relay: client %s disconnected", client_id)

    return app


class _ThreadedServer(uvicorn.Server):
    def install_signal_handlers(self) -> None:  # signals belong to the main thread
        pass


class RelayServer:
    """Relay listener running on a background thread.

    Usage:
        queue = UpdateQueue(capacity=256)
        with RelayServer(queue, RelaySettings(port=8380)) as relay:
            ...  # consumer drains queue each tick
    """

    def __init__(self, queue: UpdateQueue[ScreenUpdate], settings: RelaySettings | None = None, side: str = DEFAULT_SIDE):
        self.queue = queue
        self.settings = settings or RelaySettings()
        self.side = side
        self.app = create_app(queue, side=side, strict=self.settings.strict_markup)
        self._server: _ThreadedServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def port(self) -> int:
        """Bound port; resolves port 0 to the one the OS picked."""
        server = self._server
        if server is not None:
            for srv in getattr(server, "servers", []):
                for sock in srv.sockets or ():
                    return sock.getsockname()[1]
        return self.settings.port

    def start(self, timeout: float = 5.0) -> None:
        """Bind and start serving. Raises RelayBindError if the socket cannot be bound."""
        if self.running:
            return
        config = uvicorn.Config(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            lifespan="off",
            log_level="warning",
        )
        self._server = _ThreadedServer(config)
        self._thread = threading.Thread(target=self._run, name="mcdu-relay", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + timeout
        while not self._server.started:
            if not self._thread.is_alive():
                self._thread = None
                raise RelayBindError(f"relay could not listen on {self.settings.host}:{self.settings.port}")
            if time.monotonic() > deadline:
                self.stop()
                raise RelayBindError(f"relay did not start within {timeout:.1f}s")
            time.sleep(0.01)
        logger.info("relay: listening on %s:%d", self.settings.host, self.port)

    def _run(self) -> None:
        assert self._server is not None
        try:
            self._server.run()
        except SystemExit:
            # uvicorn exits on bind failure; start() reports it to the caller
            logger.error("relay: listener on %s:%d exited during startup", self.settings.host, self.settings.port)

    def stop(self, timeout: float = 5.0) -> None:
        server, thread = self._server, self._thread
        if server is not None:
            server.should_exit = True
        if thread is not None:
            thread.join(timeout=timeout)
            if thread.is_alive():
                logger.warning("relay: listener thread did not exit within %.1fs", timeout)
        self._thread = None
        logger.info("relay: stopped")

    def __enter__(self) -> RelayServer:
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()


__all__ = ["RelayServer", "create_app"]

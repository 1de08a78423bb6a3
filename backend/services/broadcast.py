"""Fan-out of simulation events to connected WebSocket clients."""

import asyncio
import logging
from typing import Any, TypeAlias

from fastapi import WebSocket, WebSocketDisconnect

from core.events import SimulationEvent, to_message

logger = logging.getLogger(__name__)

Outgoing: TypeAlias = tuple[WebSocket | None, dict[str, Any]]


class ConnectionManager:
    """Subscriber that forwards every published event to all sockets.

    Broadcasts and replies to a single client share one queue drained by a
    single pump task, so every client sees messages in the order they were
    produced and no socket is written to concurrently.
    """

    def __init__(self) -> None:
        self._sockets: list[WebSocket] = []
        self._queue: asyncio.Queue[Outgoing] = asyncio.Queue()
        self._pump: asyncio.Task[None] | None = None

    @property
    def connection_count(self) -> int:
        return len(self._sockets)

    def start(self) -> None:
        self._pump = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        if self._pump is None:
            return
        self._pump.cancel()
        try:
            await self._pump
        except asyncio.CancelledError:
            pass
        self._pump = None

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets.append(websocket)
        logger.info("Client connected (%d total)", len(self._sockets))

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._sockets:
            self._sockets.remove(websocket)
            logger.info("Client disconnected (%d left)", len(self._sockets))

    def __call__(self, event: SimulationEvent) -> None:
        self._queue.put_nowait((None, to_message(event)))

    def reply(self, websocket: WebSocket, message: dict[str, Any]) -> None:
        """Queue a message for one client behind everything already queued."""
        self._queue.put_nowait((websocket, message))

    async def _run(self) -> None:
        while True:
            target, message = await self._queue.get()
            try:
                if target is None:
                    await self.broadcast(message)
                else:
                    await self.send(target, message)
            except Exception:
                logger.exception("Failed to deliver %s message", message.get("type"))

    async def send(self, websocket: WebSocket, message: dict[str, Any]) -> None:
        if websocket not in self._sockets:
            return
        try:
            await websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.warning("Dropping client after failed send: %s", exc)
            self.disconnect(websocket)

    async def broadcast(self, message: dict[str, Any]) -> None:
        for websocket in list(self._sockets):
            await self.send(websocket, message)

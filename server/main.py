"""FastAPI web server streaming the fused GNSS fix.

Start with::

    GNSSFIX_NMEA_HOST=receiver.local uvicorn server.main:app --host 0.0.0.0 --port 8000

WebSocket clients connect to ``ws://<host>:8000/ws`` and receive one
``type="fix"`` JSON message each time the fix changes or is lost.
``GET /fix`` returns the current fix as a single JSON document.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect

from server.broadcaster import add_subscriber, remove_subscriber
from server.formatters import fix_payload
from server.sensors import create_fix_monitor, create_nmea_reader, run_nmea_loop

logger = logging.getLogger(__name__)

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 5.0


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    loop = asyncio.get_running_loop()
    monitor = create_fix_monitor(loop)
    reader = create_nmea_reader()
    application.state.monitor = monitor

    executor = ThreadPoolExecutor(max_workers=1)
    loop.run_in_executor(executor, run_nmea_loop, reader, monitor)
    yield
    reader.cancel()
    executor.shutdown(wait=False)


app = FastAPI(lifespan=_lifespan)


@app.get("/fix")
async def get_fix(request: Request) -> dict[str, Any]:
    """Return the current fix; fields with no data are null."""
    return fix_payload(request.app.state.monitor)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream fix JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages).
    The oldest message is dropped when the queue is full so slow clients do
    not stall the NMEA thread. The connection is closed with code 1001, and
    the client should reconnect, if no message arrives within
    ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=_QUEUE_MAX_SIZE)
    add_subscriber(queue)
    try:
        await websocket.accept()
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        remove_subscriber(queue)

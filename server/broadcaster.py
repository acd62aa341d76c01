"""Fan-out of fix messages from the NMEA thread to WebSocket client queues.

Queues are only touched on the event loop thread: the NMEA thread hands
each message over with ``call_soon_threadsafe``.
"""

import asyncio
import logging

__all__ = ["add_subscriber", "broadcast_message", "remove_subscriber", "subscriber_count"]

logger = logging.getLogger(__name__)

_subscriber_queues: set[asyncio.Queue[str]] = set()


def add_subscriber(queue: asyncio.Queue[str]) -> None:
    _subscriber_queues.add(queue)
    logger.debug("Fix subscriber added (%d active)", len(_subscriber_queues))


def remove_subscriber(queue: asyncio.Queue[str]) -> None:
    """Stop delivering to *queue*; unknown queues are ignored."""
    _subscriber_queues.discard(queue)
    logger.debug("Fix subscriber removed (%d active)", len(_subscriber_queues))


def subscriber_count() -> int:
    return len(_subscriber_queues)


def _enqueue_message(queue: asyncio.Queue[str], message: str) -> None:
    """Put *message* on *queue*, dropping the oldest entry when it is full."""
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(message)


def broadcast_message(message: str, loop: asyncio.AbstractEventLoop) -> None:
    """Deliver *message* to every subscriber queue; safe to call from any thread."""
    for queue in tuple(_subscriber_queues):
        loop.call_soon_threadsafe(_enqueue_message, queue, message)

import asyncio
import concurrent.futures
import uuid
from typing import Any

from fastapi import WebSocket

from techdoc.notifications.base import BaseChannel
from techdoc.notifications.exceptions import NotificationError


class WebSocketChannel(BaseChannel):
    """Delivers events to a WebSocket owned by an asyncio loop.

    send() is called from worker threads, so the coroutine is scheduled on the
    connection's own loop and awaited with a timeout.
    """

    def __init__(
        self,
        websocket: WebSocket,
        loop: asyncio.AbstractEventLoop,
        send_timeout_seconds: float = 5.0,
    ) -> None:
        self._websocket = websocket
        self._loop = loop
        self._send_timeout_seconds = send_timeout_seconds
        self._channel_id = uuid.uuid4().hex

    @property
    def channel_id(self) -> str:
        return self._channel_id

    def send(self, event_name: str, payload: dict[str, Any]) -> None:
        message = {"event": event_name, "data": payload}
        try:
            future = asyncio.run_coroutine_threadsafe(
                self._websocket.send_json(message), self._loop
            )
        except Exception as exc:
            raise NotificationError(f"WebSocket send failed: {exc}") from exc
        try:
            future.result(timeout=self._send_timeout_seconds)
        except concurrent.futures.TimeoutError as exc:
            future.cancel()
            raise NotificationError(
                f"WebSocket send timed out after {self._send_timeout_seconds}s"
            ) from exc
        except Exception as exc:
            raise NotificationError(f"WebSocket send failed: {exc}") from exc

import asyncio
import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from techdoc.api.dependencies import USER_ID_HEADER, Services
from techdoc.logging.logger import Log
from techdoc.notifications.websocket_channel import WebSocketChannel

router = APIRouter()


@router.websocket("/ws/documents")
async def document_notifications(websocket: WebSocket) -> None:
    """Join the caller's notification group for the lifetime of the connection.

    Clients may also send {"action": "join"} or {"action": "leave"} to toggle
    membership without disconnecting.
    """
    services: Services = websocket.app.state.services
    user_id = websocket.headers.get(USER_ID_HEADER)
    if not user_id:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    channel = WebSocketChannel(
        websocket,
        asyncio.get_running_loop(),
        services.settings.notification_send_timeout_seconds,
    )
    services.broker.register(user_id, channel)
    try:
        while True:
            action = _parse_action(await websocket.receive_text())
            if action == "join":
                services.broker.register(user_id, channel)
            elif action == "leave":
                services.broker.unregister(user_id, channel)
    except WebSocketDisconnect:
        Log.info(f"Channel {channel.channel_id} of user {user_id} disconnected")
    finally:
        services.broker.unregister(user_id, channel)


def _parse_action(message: str) -> str | None:
    try:
        parsed = json.loads(message)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    action = parsed.get("action")
    return action if isinstance(action, str) else None

"""WebSocket endpoint for real-time user directory notifications."""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from src.config import get_settings
from src.services.realtime import RealtimeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/ws", tags=["websocket"])
settings = get_settings()


@router.websocket("/users")
async def websocket_user_sync(websocket: WebSocket) -> None:
    """WebSocket endpoint for user change notifications.

    Each connection holds its own subscription to the Redis channel, so every
    connected client receives every broadcast. Nothing is replayed to clients
    that connect later.
    """
    realtime_service = RealtimeService()
    await websocket.accept()
    client = websocket.client
    logger.info(f"WebSocket connected: {client}")

    async def handle_messages() -> None:
        """Receive messages from Redis and forward to WebSocket."""
        async for message in realtime_service.subscribe(settings.realtime_channel):
            try:
                await websocket.send_json(message)
            except WebSocketDisconnect:
                break
            except Exception as e:
                logger.error(f"Error sending WebSocket message: {e}")
                break

    async def handle_ping() -> None:
        """Send periodic pings to keep connection alive."""
        while True:
            try:
                await asyncio.sleep(settings.ws_ping_interval_seconds)
                await websocket.send_json({"type": "ping"})
            except Exception:
                break

    async def handle_client() -> None:
        """Handle incoming messages from client (pong responses)."""
        while True:
            try:
                data = await websocket.receive_json()
                if data.get("type") == "pong":
                    continue  # Keepalive acknowledgment
            except WebSocketDisconnect:
                break
            except Exception:
                break

    tasks = [
        asyncio.create_task(handle_messages()),
        asyncio.create_task(handle_ping()),
        asyncio.create_task(handle_client()),
    ]
    try:
        # Whichever side ends first (client gone, subscription closed) ends the connection
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.error(f"WebSocket error: {task.exception()}")
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        ):
            await websocket.close()
        await realtime_service.cleanup()
        logger.info(f"WebSocket disconnected: {client}")

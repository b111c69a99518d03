"""
WebSocket manager for pushing seating changes to staff devices
"""

import asyncio
import json
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from seatsync.schemas.seating import Seating
from seatsync.services.sync_engine import SeatingNotReadyError

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Manages WebSocket connections of staff devices"""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """Accept WebSocket connection"""
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WebSocket connected. Total connections: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        """Remove WebSocket connection"""
        try:
            self.active_connections.remove(websocket)
            logger.info(f"WebSocket disconnected. Remaining connections: {len(self.active_connections)}")
        except ValueError:
            # WebSocket was not in the list
            pass

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, message: dict):
        """Broadcast message to every connected device"""
        # Create list copy to avoid modification during iteration
        connections = self.active_connections.copy()

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)

    def broadcast_threadsafe(self, loop: asyncio.AbstractEventLoop, message: dict):
        """Schedule a broadcast on ``loop`` from any thread"""
        if loop.is_closed():
            return
        asyncio.run_coroutine_threadsafe(self.broadcast(message), loop)

    def get_connection_count(self) -> int:
        return len(self.active_connections)

def seating_message(seating: Seating) -> dict:
    return {
        "type": "seating",
        "seating": seating.to_record(),
        "timestamp": datetime.utcnow().isoformat()
    }

def alert_message(text: str) -> dict:
    return {
        "type": "alert",
        "message": text,
        "timestamp": datetime.utcnow().isoformat()
    }

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/seating")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for live seating updates"""
    sync_engine = websocket.app.state.sync_engine

    await websocket_manager.connect(websocket)

    try:
        welcome_message = {
            "type": "connection",
            "mode": sync_engine.mode.value if sync_engine.mode else None,
            "ready": sync_engine.is_ready,
            "connection_count": websocket_manager.get_connection_count()
        }
        await websocket_manager.send_personal_message(welcome_message, websocket)

        try:
            await websocket_manager.send_personal_message(seating_message(sync_engine.seating), websocket)
        except SeatingNotReadyError:
            # First snapshot is pushed to everyone once adopted
            pass

        while True:
            data = await websocket.receive_text()

            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if isinstance(client_message, dict) and client_message.get("type") == "ping":
                pong_message = {
                    "type": "pong",
                    "timestamp": client_message.get("timestamp")
                }
                await websocket_manager.send_personal_message(pong_message, websocket)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        websocket_manager.disconnect(websocket)

@router.get("/stats")
async def websocket_stats():
    """Get WebSocket connection statistics (for debugging)"""
    return {"total_connections": websocket_manager.get_connection_count()}

"""
Event Seating Sync - FastAPI Backend
Main application entry point
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from seatsync.core.config import settings
from seatsync.core.db import engine, Base
from seatsync.api import routes_public, routes_seating, ws
from seatsync.api.ws import websocket_manager, seating_message, alert_message
from seatsync.services.bootstrap import build_sync_engine

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create the local cache table
    Base.metadata.create_all(bind=engine)
    logger.info("Local cache table ready")

    loop = asyncio.get_running_loop()
    sync_engine = build_sync_engine(settings)
    sync_engine.add_listener(
        lambda seating: websocket_manager.broadcast_threadsafe(loop, seating_message(seating))
    )
    sync_engine.add_alert_listener(
        lambda text: websocket_manager.broadcast_threadsafe(loop, alert_message(text))
    )
    app.state.sync_engine = sync_engine
    # Subscribing starts with a blocking Firestore read
    await asyncio.to_thread(sync_engine.start)
    logger.info(f"Seating sync started in {sync_engine.mode.value} mode")

    yield

    await asyncio.to_thread(sync_engine.close)
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Event Seating Sync",
    description="Guest-to-table seating kept in sync across staff devices",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_seating.router, prefix="/seating", tags=["seating"])
app.include_router(ws.router, prefix="/ws", tags=["websocket"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )

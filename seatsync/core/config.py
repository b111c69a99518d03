"""
Configuration settings for the application
"""

import os
from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Remote shared record (Firestore)
    USE_FIREBASE: bool = os.getenv("USE_FIREBASE", "false").lower() in ("1", "true", "yes")
    FIREBASE_CREDENTIALS_JSON: str | None = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_FILE: str | None = os.getenv("FIREBASE_CREDENTIALS_FILE")
    FIREBASE_CREDENTIALS_B64: str | None = os.getenv("FIREBASE_CREDENTIALS_B64")
    SEATING_COLLECTION: str = os.getenv("SEATING_COLLECTION", "wedding")
    SEATING_DOCUMENT: str = os.getenv("SEATING_DOCUMENT", "seating_chart")
    
    # Local persisted cache
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./seating_cache.db")
    LOCAL_CACHE_KEY: str = os.getenv("LOCAL_CACHE_KEY", "wedding_seating_data")
    
    # Seating plan used when nothing has been persisted yet
    SEATING_PLAN_FILE: Optional[str] = os.getenv("SEATING_PLAN_FILE")
    
    # Advisory capacities
    HEAD_TABLE_ID: str = os.getenv("HEAD_TABLE_ID", "main")
    HEAD_TABLE_CAPACITY: int = 12
    TABLE_CAPACITY: int = 10
    
    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]
    
    class Config:
        env_file = ".env"

settings = Settings()

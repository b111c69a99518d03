"""
Local cache entry model
"""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime

from seatsync.core.db import Base

class CacheEntry(Base):
    __tablename__ = "cache_entries"
    
    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

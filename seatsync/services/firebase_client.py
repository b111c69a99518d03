"""
Firebase initialization and helpers
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any
import base64
import os

import firebase_admin
from firebase_admin import credentials, firestore

from seatsync.core.config import settings

logger = logging.getLogger(__name__)


def load_credentials_info() -> dict[str, Any] | None:
    """Read service account info from FIREBASE_CREDENTIALS_JSON, _B64 or _FILE, in that order."""
    if settings.FIREBASE_CREDENTIALS_JSON:
        return json.loads(settings.FIREBASE_CREDENTIALS_JSON)
    if settings.FIREBASE_CREDENTIALS_B64:
        decoded = base64.b64decode(settings.FIREBASE_CREDENTIALS_B64).decode("utf-8")
        return json.loads(decoded)
    if settings.FIREBASE_CREDENTIALS_FILE and os.path.exists(settings.FIREBASE_CREDENTIALS_FILE):
        with open(settings.FIREBASE_CREDENTIALS_FILE, "r", encoding="utf-8") as f:
            return json.load(f)
    return None


@lru_cache(maxsize=1)
def get_firestore_client():
    """Initialize and return a cached Firestore client, or None when Firebase is disabled.

    Raises RuntimeError when Firebase is enabled but no usable credentials are configured.
    """
    if not settings.USE_FIREBASE:
        return None

    if not firebase_admin._apps:
        try:
            info = load_credentials_info()
        except (ValueError, OSError) as e:
            raise RuntimeError(f"Firebase credentials could not be read: {e}") from e

        if not info:
            raise RuntimeError("Firebase credentials not provided. Set FIREBASE_CREDENTIALS_FILE, FIREBASE_CREDENTIALS_JSON, or FIREBASE_CREDENTIALS_B64")

        cred = credentials.Certificate(info)
        firebase_admin.initialize_app(cred)
        logger.info(f"Firebase initialized for project {info.get('project_id')}")

    return firestore.client()

"""
Firebase admin initialization and helpers.

The mobile client authenticates users with Firebase Authentication and
passes Firebase ID tokens to the backend. The backend verifies those
tokens using the Firebase Admin SDK and reads/writes Firestore with
admin privileges.
"""

import os
import firebase_admin
from firebase_admin import credentials, firestore

from app.core.config import settings
from app.services.logger import get_logger

logger = get_logger(__name__)

# Global references to avoid re-initialization
_firebase_app = None
db = None


def init_firebase():
    """
    Initialize Firebase Admin SDK if not already initialized.

    Priority:
    1. FIREBASE_CREDENTIALS environment variable / .env entry
    2. Fallback to local dev file: app/core/firebase_key.json
    """

    global _firebase_app, db

    # Prevent re-initialization (important for Uvicorn reload)
    if firebase_admin._apps:
        if db is None:
            db = firestore.client()
        return

    cred_path = settings.FIREBASE_CREDENTIALS

    if not os.path.exists(cred_path):
        raise RuntimeError(
            f"Firebase credentials not found at: {cred_path}\n"
            "Set FIREBASE_CREDENTIALS env var or place firebase_key.json correctly."
        )

    cred = credentials.Certificate(cred_path)
    _firebase_app = firebase_admin.initialize_app(cred)

    db = firestore.client()

    logger.info("Firebase Admin initialized successfully.")


def get_db():
    """Return the shared Firestore client (None until init_firebase ran)."""
    global db
    if db is None and firebase_admin._apps:
        db = firestore.client()
    return db

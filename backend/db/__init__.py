"""Database layer."""

from db.firestore import FirestoreService

__all__ = ["FirestoreService"]

"""Data access layer for persisted client state"""

from typing import Any, Optional
from sqlalchemy.orm import Session
from creditgo_gateway.config import settings
from creditgo_gateway.domain.exceptions import ProfileNotFoundError
from creditgo_gateway.domain.models import FinancialProfile
from creditgo_gateway.infrastructure.database.models import KeyValueEntry


class KeyValueRepository:
    """JSON values under a fixed storage namespace"""

    def __init__(self, db: Session, namespace: str | None = None):
        self.db = db
        self.namespace = namespace or settings.storage_namespace

    def get(self, key: str) -> Optional[Any]:
        entry = self.db.get(KeyValueEntry, (self.namespace, key))
        return entry.value if entry else None

    def set(self, key: str, value: Any) -> None:
        """Insert or replace a value (not committed)"""
        entry = self.db.get(KeyValueEntry, (self.namespace, key))
        if entry is None:
            self.db.add(KeyValueEntry(namespace=self.namespace, key=key, value=value))
        else:
            entry.value = value
        self.db.flush()

    def delete(self, key: str) -> bool:
        entry = self.db.get(KeyValueEntry, (self.namespace, key))
        if entry is None:
            return False
        self.db.delete(entry)
        self.db.flush()
        return True


class ProfileRepository:
    """Repository for users' computed financial profiles"""

    def __init__(self, db: Session, namespace: str | None = None):
        self.store = KeyValueRepository(db, namespace)

    @staticmethod
    def profile_key(user_id: str) -> str:
        return f"{user_id}:financialProfile"

    def save_profile(self, user_id: str, profile: FinancialProfile) -> None:
        """Replace the stored profile wholesale"""
        self.store.set(self.profile_key(user_id), profile.to_dict())

    def get_profile(self, user_id: str) -> FinancialProfile:
        """
        Raises:
            ProfileNotFoundError: nothing stored for this user
        """
        data = self.store.get(self.profile_key(user_id))
        if data is None:
            raise ProfileNotFoundError(f"No financial profile stored for user {user_id}")
        return FinancialProfile.from_dict(data)

    def delete_profile(self, user_id: str) -> None:
        """
        Raises:
            ProfileNotFoundError: nothing stored for this user
        """
        if not self.store.delete(self.profile_key(user_id)):
            raise ProfileNotFoundError(f"No financial profile stored for user {user_id}")

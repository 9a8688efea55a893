"""Profile repository: one UserProfile per user id, last write wins.

save_profile() overwrites the stored record wholesale (no merge): optional
fields missing from the new profile are gone afterwards.
"""
import json
import logging
import os
import shutil
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from mealgen.domain.Errors import ContractValidationError, StoreError
from mealgen.utilities import config
from mealgen.utilities.validators import UserProfile, validate

logger = logging.getLogger(__name__)


class ProfileRepository(ABC):
    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Return the saved profile, or None when nothing was saved. Never raises."""

    @abstractmethod
    def save_profile(self, user_id: str, profile) -> UserProfile:
        """Replace the user's profile. Raises StoreError if it cannot be persisted."""


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self):
        self._profiles: Dict[str, dict] = {}
        self._lock = threading.Lock()

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        with self._lock:
            raw = self._profiles.get(user_id)
        return UserProfile.model_validate(raw) if raw is not None else None

    def save_profile(self, user_id: str, profile) -> UserProfile:
        profile = validate(UserProfile, profile)
        with self._lock:
            self._profiles[user_id] = profile.to_dict()
        return profile


class JsonProfileRepository(ProfileRepository):
    """Profiles kept in a single JSON object ``{user_id: profile}`` on disk."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or config.PROFILE_FILE)
        self._lock = threading.Lock()

    def _read_store(self) -> dict:
        with open(self.path, 'r', encoding='utf-8') as f:
            store = json.load(f)
        if not isinstance(store, dict):
            raise ValueError(f"Profile store {self.path} does not contain a JSON object")
        return store

    def _atomic_write(self, store: dict):
        os.makedirs(self.path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".profiles_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            store = self._read_store()
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.error(f"Could not read profile store {self.path}: {e}")
            return None

        raw = store.get(user_id)
        if raw is None:
            return None
        try:
            return validate(UserProfile, raw)
        except ContractValidationError as e:
            logger.error(f"Stored profile for {user_id!r} is invalid: {e}")
            return None

    def save_profile(self, user_id: str, profile) -> UserProfile:
        profile = validate(UserProfile, profile)
        with self._lock:
            try:
                store = self._read_store()
            except FileNotFoundError:
                store = {}
            except (OSError, ValueError) as e:
                # Refuse to overwrite a store we cannot read: other users' profiles live there too
                raise StoreError(f"Could not read profile store: {e}") from e
            store[user_id] = profile.to_dict()
            try:
                self._atomic_write(store)
            except OSError as e:
                raise StoreError(f"Could not save profile: {e}") from e
        logger.info(f"Profile saved for {user_id!r}")
        return profile


_repository: Optional[ProfileRepository] = None


def get_profile_repository() -> ProfileRepository:
    """Process-wide repository selected by PROFILE_STORE ("json" or "memory")."""
    global _repository
    if _repository is None:
        if config.PROFILE_STORE == "memory":
            _repository = InMemoryProfileRepository()
        else:
            _repository = JsonProfileRepository(config.PROFILE_FILE)
    return _repository


__all__ = [
    'ProfileRepository', 'InMemoryProfileRepository', 'JsonProfileRepository', 'get_profile_repository',
]

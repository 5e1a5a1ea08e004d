"""
Profile store: onboarding answers (sparks, values, dream) keyed by user id.
Persisted to a JSON file.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Protocol for profile persistence."""

    def get(self, user_id: str) -> Optional[Dict]:
        """Return the profile dict if it exists, else None."""
        ...

    def upsert(self, user_id: str, sparks: List[str], values: List[str], dream: str) -> Dict:
        """Create or replace the user's profile. Returns the stored dict."""
        ...


def has_completed_onboarding(profile: Optional[Dict]) -> bool:
    """True when the profile has at least one spark, one value, and a dream."""
    return bool(
        profile
        and profile.get("sparks")
        and profile.get("values")
        and (profile.get("dream") or "").strip()
    )


class JsonProfileStore:
    """Profile store backed by a JSON file (e.g. data/profiles.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._profiles: Dict[str, Dict] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("[profiles] failed to load %s: %s", self._path, e)
            return
        profiles = data.get("profiles", data) if isinstance(data, dict) else data
        if isinstance(profiles, list):
            for p in profiles:
                uid = p.get("user_id")
                if uid:
                    self._profiles[uid] = p
        elif isinstance(profiles, dict):
            for uid, p in profiles.items():
                self._profiles[uid] = {**p, "user_id": uid}

    def _save(self) -> None:
        out = {"profiles": list(self._profiles.values())}
        with open(self._path, "w") as f:
            json.dump(out, f, indent=2)

    def get(self, user_id: str) -> Optional[Dict]:
        with self._lock:
            profile = self._profiles.get(user_id.strip())
            return dict(profile) if profile else None

    def upsert(self, user_id: str, sparks: List[str], values: List[str], dream: str) -> Dict:
        uid = user_id.strip()
        if not uid:
            raise ValueError("user_id cannot be empty")
        profile = {
            "user_id": uid,
            "sparks": list(sparks),
            "values": list(values),
            "dream": dream,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            self._profiles[uid] = profile
            self._save()
        logger.info("[profiles] saved user=%s sparks=%s values=%s dream_chars=%s",
                    uid, len(sparks), len(values), len(dream))
        return dict(profile)

"""
Preference storage for favorites and recent searches.

Each key holds a JSON-encoded list of strings in the preferences table,
the same way a browser key-value store would keep it.
"""
import json
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db import make_engine, make_session_factory, init_db
from app.models import Preference

logger = logging.getLogger(__name__)

FAVORITES_KEY = "goalmind_favorites"
HISTORY_KEY = "goalmind_history"


class PreferenceStore:
    """
    Load/save string lists by key.

    Loading never raises: a missing key and a payload that is not a JSON
    array of strings both come back as an empty list. The parse error is
    logged and discarded on purpose so a corrupt entry can never block the UI.
    Saving never raises either; a failed write is logged and dropped.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine or make_engine()
        self._session_factory = make_session_factory(self._engine)
        init_db(self._engine)

    @contextmanager
    def _session(self):
        """Get a database session."""
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    def _read_raw(self, key: str) -> Optional[str]:
        with self._session() as session:
            row = session.get(Preference, key)
            return row.value if row is not None else None

    def load(self, key: str) -> List[str]:
        """Return the list stored under key, or [] if absent or malformed."""
        try:
            raw = self._read_raw(key)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read preference {key}: {e}")
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse stored {key}: {e}")
            return []

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            logger.warning(f"Stored {key} is not a list of strings, ignoring")
            return []

        return data

    def save(self, key: str, items: Iterable[str]) -> None:
        """Serialize items as JSON and write them under key."""
        self.write_raw(key, json.dumps(list(items)))

    def write_raw(self, key: str, value: str) -> None:
        """Write an already-serialized payload under key."""
        try:
            with self._session() as session:
                row = session.get(Preference, key)
                if row is None:
                    session.add(Preference(key=key, value=value))
                else:
                    row.value = value
                    row.updated_at = datetime.utcnow()
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save preference {key}: {e}")


# Singleton instance
_store: Optional[PreferenceStore] = None


def get_preference_store() -> PreferenceStore:
    """Get the preference store instance."""
    global _store
    if _store is None:
        _store = PreferenceStore()
    return _store

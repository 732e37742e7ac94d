"""
In-memory store for city list sessions.
"""

import uuid
from collections import OrderedDict
from datetime import datetime, UTC
from typing import Optional, Tuple

from city_weather.services.city_list import CityListView
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)


class ListSessionStore:
    """
    LRU store of live CityListView instances keyed by session id.

    When the store is full the least recently used session is evicted and
    its pending debounced search is cancelled.
    """

    def __init__(self, max_size: int = 200):
        self.sessions: OrderedDict[str, Tuple[CityListView, datetime]] = OrderedDict()
        self.max_size = max_size

    def __len__(self) -> int:
        return len(self.sessions)

    def create(self, view: CityListView) -> str:
        """
        Register a view and return its new session id.
        """
        session_id = uuid.uuid4().hex
        if len(self.sessions) >= self.max_size:
            evicted_id, (evicted, _) = self.sessions.popitem(last=False)
            evicted.close()
            logger.info(
                "List session evicted",
                extra={"event": "session_evicted", "session_id": evicted_id},
            )

        self.sessions[session_id] = (view, datetime.now(UTC))
        return session_id

    def get(self, session_id: str) -> Optional[CityListView]:
        """
        Retrieve a session's view and mark it as recently used.
        """
        if session_id in self.sessions:
            view, _ = self.sessions[session_id]
            self.sessions[session_id] = (view, datetime.now(UTC))
            self.sessions.move_to_end(session_id)
            return view
        return None

    def remove(self, session_id: str) -> bool:
        entry = self.sessions.pop(session_id, None)
        if entry is None:
            return False
        entry[0].close()
        return True

    def clear(self):
        """Close and drop all sessions."""
        for view, _ in self.sessions.values():
            view.close()
        self.sessions.clear()

## Per-session enrichment state
import threading
from collections import OrderedDict
from dataclasses import dataclass, field

from pathwise.roadmaps.enrichment import EnrichmentCache
from pathwise.roadmaps.resources import ResourceCollection


@dataclass
class RoadmapSession:
    session_id: str
    cache: EnrichmentCache = field(default_factory=EnrichmentCache)
    resources: ResourceCollection = field(default_factory=ResourceCollection)


class SessionRegistry:
    """In-memory LRU of sessions, capped at max_sessions entries."""

    def __init__(self, max_sessions: int = 50):
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, RoadmapSession] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> RoadmapSession:
        """Thread-safe LRU lookup; creates the session on first use."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = RoadmapSession(session_id)
                self._sessions[session_id] = session
            self._sessions.move_to_end(session_id)
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
            return session

    def __len__(self) -> int:
        return len(self._sessions)

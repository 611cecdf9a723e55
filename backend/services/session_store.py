"""In-memory analysis results keyed by an explicit session."""

import logging
import threading
import uuid
from collections import OrderedDict
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from config import settings
from models.responses import AnalysisResponse
from services.errors import ConfigurationError

logger = logging.getLogger(__name__)


class AnalysisSession(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SessionStore:
    """Results of the latest analysis per session id.

    Holds at most ``max_sessions`` entries; saving past the cap evicts the
    least recently saved session.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        self._max_sessions = max_sessions if max_sessions is not None else settings.max_sessions
        if self._max_sessions <= 0:
            raise ConfigurationError(f"max_sessions must be positive (got {self._max_sessions})")
        self._lock = threading.Lock()
        self._results: OrderedDict[str, tuple[AnalysisSession, AnalysisResponse]] = OrderedDict()

    def save(self, session: AnalysisSession, result: AnalysisResponse) -> None:
        with self._lock:
            self._results[session.id] = (session, result)
            self._results.move_to_end(session.id)
            while len(self._results) > self._max_sessions:
                evicted, _ = self._results.popitem(last=False)
                logger.info("Evicted analysis for session %s", evicted)
        logger.info("Stored analysis for session %s", session.id)

    def get(self, session_id: str) -> AnalysisResponse | None:
        with self._lock:
            entry = self._results.get(session_id)
        return entry[1] if entry else None

    def clear(self, session_id: str) -> bool:
        with self._lock:
            return self._results.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._results)

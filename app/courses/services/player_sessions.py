"""In-memory registry of open video players.

Each player owns a ProgressTracker, and with it the throttle window for
its samples. Closing a player (or letting it idle out) discards that
window; reopening starts a fresh one.
"""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.courses.services.progress_service import ProgressTracker

logger = logging.getLogger(__name__)


@dataclass
class PlayerSession:
    id: str
    user_id: UUID
    course_id: UUID
    lecture_id: UUID
    tracker: ProgressTracker
    last_seen_at: float = field(default=0.0)


class PlayerSessionRegistry:
    def __init__(
        self,
        idle_seconds: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.idle_seconds = (
            settings.PLAYER_SESSION_IDLE_SECONDS if idle_seconds is None else idle_seconds
        )
        self._clock = clock
        self._sessions: dict[str, PlayerSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open(
        self, user_id: UUID, course_id: UUID, lecture_id: UUID, tracker: ProgressTracker
    ) -> PlayerSession:
        self.prune_idle()
        session = PlayerSession(
            id=uuid.uuid4().hex,
            user_id=user_id,
            course_id=course_id,
            lecture_id=lecture_id,
            tracker=tracker,
            last_seen_at=self._clock(),
        )
        self._sessions[session.id] = session
        return session

    def get(self, player_id: str, user_id: UUID) -> PlayerSession:
        session = self._sessions.get(player_id)
        # Another user's player is reported as missing
        if session is None or session.user_id != user_id:
            raise NotFoundError("Player session not found", resource="player_session")
        session.last_seen_at = self._clock()
        return session

    def close(self, player_id: str, user_id: UUID) -> None:
        self.get(player_id, user_id)
        del self._sessions[player_id]

    def prune_idle(self) -> int:
        cutoff = self._clock() - self.idle_seconds
        expired = [sid for sid, s in self._sessions.items() if s.last_seen_at < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Dropped %d idle player sessions", len(expired))
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()


player_registry = PlayerSessionRegistry()


def get_player_registry() -> PlayerSessionRegistry:
    return player_registry

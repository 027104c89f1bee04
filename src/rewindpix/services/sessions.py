"""In-memory registry of per-browser reunion controllers."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from rewindpix.services.controller import ReunionController


@dataclass
class _SessionEntry:
    controller: ReunionController
    expires_at: datetime


@dataclass
class ReunionSessionStore:
    """Hand out one controller per session id, expiring idle sessions."""

    factory: Callable[[], ReunionController]
    ttl_seconds: int = 3600
    _entries: dict[str, _SessionEntry] = field(default_factory=dict)

    def get_or_create(self, session_id: str | None) -> tuple[str, ReunionController]:
        """Return the session's controller, starting a new session if needed."""
        now = datetime.now(tz=UTC)
        self._evict_expired(now)
        if session_id and session_id in self._entries:
            resolved_id = session_id
        else:
            resolved_id = uuid4().hex
            self._entries[resolved_id] = _SessionEntry(
                controller=self.factory(), expires_at=now
            )
        entry = self._entries[resolved_id]
        entry.expires_at = now + timedelta(seconds=self.ttl_seconds)
        return resolved_id, entry.controller

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_expired(self, now: datetime) -> None:
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            self._entries.pop(key, None)

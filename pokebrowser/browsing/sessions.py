"""
Browse session registry.

A browse session is the server-side stand-in for one mounted list view:
it owns exactly one PaginatedResourceFetcher, created on open and closed
on unmount. Sessions are never shared between kinds.
"""

import logging
import uuid
from dataclasses import dataclass, field
from threading import Lock

from pokebrowser.browsing.fetcher import PaginatedResourceFetcher
from pokebrowser.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)


class SessionNotFoundError(KnownError):
    """Raised when a session id is unknown or already closed."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            kind=FailureKind.SESSION_CLOSED,
            message=f"Browse session not found: {session_id}",
            suggestion="Open a new browse session.",
            status_code=404,
        )


@dataclass
class BrowseSessionRegistry:
    """Open browse sessions keyed by id."""

    _sessions: dict[str, PaginatedResourceFetcher] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def open(self, fetcher: PaginatedResourceFetcher) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = fetcher
        logger.info(
            "BROWSE_SESSION_OPENED",
            extra={"session_id": session_id, "kind": fetcher.kind.name},
        )
        return session_id

    def get(self, session_id: str) -> PaginatedResourceFetcher:
        """
        Raises:
            SessionNotFoundError: If the session does not exist
        """
        with self._lock:
            fetcher = self._sessions.get(session_id)
        if fetcher is None:
            raise SessionNotFoundError(session_id)
        return fetcher

    def close(self, session_id: str) -> None:
        """Close and forget a session. In-flight results are dropped."""
        with self._lock:
            fetcher = self._sessions.pop(session_id, None)
        if fetcher is None:
            raise SessionNotFoundError(session_id)
        fetcher.close()
        logger.info("BROWSE_SESSION_CLOSED", extra={"session_id": session_id})

    def close_all(self) -> None:
        with self._lock:
            fetchers = list(self._sessions.values())
            self._sessions.clear()
        for fetcher in fetchers:
            fetcher.close()

    def __len__(self) -> int:
        return len(self._sessions)


# Singleton registry instance
_registry: BrowseSessionRegistry | None = None


def get_session_registry() -> BrowseSessionRegistry:
    """Get the process-wide session registry (FastAPI dependency)."""
    global _registry
    if _registry is None:
        _registry = BrowseSessionRegistry()
    return _registry


def reset_session_registry() -> None:
    """Close every session and drop the registry (for testing)."""
    global _registry
    if _registry is not None:
        _registry.close_all()
    _registry = None

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from ..models.database import LawyerPreference
from ..models.schemas import FirmContext

logger = logging.getLogger(__name__)

DEFAULT_SUCCESS_PATTERNS = "Standard Saudi legal procedures"
DEFAULT_PREFERRED_APPROACHES = "Conservative, Sharia-compliant legal strategies"

FirmContextLoader = Callable[[str], FirmContext]

def default_firm_context(firm_id: str) -> FirmContext:
    """Placeholder knowledge used until firm history is mined."""
    return FirmContext(
        specializations=[],
        success_patterns=DEFAULT_SUCCESS_PATTERNS,
        preferred_approaches=DEFAULT_PREFERRED_APPROACHES,
    )

class SQLAlchemyFirmContextLoader:
    """Derives a firm's specializations from its lawyers' stored preferences."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def __call__(self, firm_id: str) -> FirmContext:
        db = self.session_factory()
        try:
            rows = db.query(LawyerPreference.specializations).filter(
                LawyerPreference.law_firm_id == firm_id
            ).all()
        finally:
            db.close()

        specializations = sorted({
            specialization
            for (values,) in rows
            for specialization in (values or [])
        })
        return FirmContext(
            specializations=specializations,
            success_patterns=DEFAULT_SUCCESS_PATTERNS,
            preferred_approaches=DEFAULT_PREFERRED_APPROACHES,
        )

class FirmContextCache:
    """Cache-aside store of per-firm context with a fixed time-to-live.

    Entries expire ``ttl_seconds`` after they were written, whatever the
    access pattern; expiry is checked lazily on read. Concurrent misses for
    the same firm may each load and overwrite the entry (last write wins).
    """

    def __init__(
        self,
        loader: FirmContextLoader = default_firm_context,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.loader = loader
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[FirmContext, float]] = {}

    def get(self, firm_id: str) -> FirmContext:
        cached = self._lookup(firm_id)
        if cached is not None:
            return cached

        firm_context = self.loader(firm_id)
        self._entries[firm_id] = (firm_context, self.clock() + self.ttl_seconds)
        logger.debug(f"Cached firm context for {firm_id}")
        return firm_context

    def _lookup(self, firm_id: str) -> Optional[FirmContext]:
        entry = self._entries.get(firm_id)
        if entry is None:
            return None

        firm_context, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(firm_id, None)
            return None
        return firm_context

    def invalidate(self, firm_id: str):
        self._entries.pop(firm_id, None)

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

import asyncio
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import PreferenceLookupFailure
from ..models.database import LawyerPreference
from ..models.schemas import LawyerPreferences

logger = logging.getLogger(__name__)

class PreferenceStore:
    """Read access to lawyers' personalization records."""

    def get_preferences(self, user_id: str) -> Optional[LawyerPreferences]:
        raise NotImplementedError

class SQLAlchemyPreferenceStore(PreferenceStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_preferences(self, user_id: str) -> Optional[LawyerPreferences]:
        db = self.session_factory()
        try:
            record = db.query(LawyerPreference).filter(
                LawyerPreference.user_id == user_id
            ).first()
            return LawyerPreferences.model_validate(record) if record else None
        except SQLAlchemyError as e:
            raise PreferenceLookupFailure(f"Could not load preferences for {user_id}") from e
        finally:
            db.close()

class LawyerPreferenceResolver:
    """Best-effort personalization: lookup failures resolve to no preferences."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    async def resolve(self, user_id: str) -> Optional[LawyerPreferences]:
        try:
            return await asyncio.to_thread(self.store.get_preferences, user_id)
        except Exception as e:
            logger.error(f"Error fetching lawyer preferences for {user_id}: {str(e)}")
            return None

"""Implementation of (Profile)Repository using SQLAlchemy"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import ProfileModel
from src.db.schema import DBProfile


class SQLProfileRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_profile(self, profile_id: UUID) -> ProfileModel | None:
        """Get profile by ID, if record exists."""
        profile_db = self._fetch_profile(profile_id)
        if profile_db:
            return self._to_model(profile_db)
        return None

    def create_profile(self, profile: ProfileModel) -> ProfileModel:
        """Store a new profile and return the stored data."""
        profile_db = DBProfile(
            id=profile.id,
            display_name=profile.display_name,
            games_played=profile.games_played,
            wins=profile.wins,
            created_at=profile.created_at,
        )
        self.db.add(profile_db)
        self.db.commit()
        self.db.refresh(profile_db)
        return self._to_model(profile_db)

    def update_profile(self, profile: ProfileModel) -> ProfileModel | None:
        """Overwrite the record with the same ID."""
        profile_db = self._fetch_profile(profile.id)
        if not profile_db:
            return None
        profile_db.display_name = profile.display_name
        profile_db.games_played = profile.games_played
        profile_db.wins = profile.wins
        self.db.commit()
        self.db.refresh(profile_db)
        return self._to_model(profile_db)

    def delete_profile(self, profile_id: UUID) -> ProfileModel | None:
        """Remove a profile's record."""
        profile_db = self._fetch_profile(profile_id)
        if not profile_db:
            return None
        profile_model = self._to_model(profile_db)
        self.db.delete(profile_db)
        self.db.commit()
        return profile_model

    def _fetch_profile(self, profile_id: UUID) -> DBProfile | None:
        query = select(DBProfile).where(DBProfile.id == profile_id)
        return self.db.scalar(query)

    def _to_model(self, profile_db: DBProfile) -> ProfileModel:
        """Convert SQLAlchemy model to data transfer model."""
        return ProfileModel(
            id=profile_db.id,
            display_name=profile_db.display_name,
            created_at=profile_db.created_at,
            games_played=profile_db.games_played,
            wins=profile_db.wins,
        )

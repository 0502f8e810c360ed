"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, tests use an in-memory dictionary)"""

from typing import Protocol
from uuid import UUID

from src.core.models import ProfileModel


class ProfileRepository(Protocol):
    """Persistence layer orchestration"""

    def get_profile(self, profile_id: UUID) -> ProfileModel | None:
        """Get profile by ID, if record exists."""
        ...

    def create_profile(self, profile: ProfileModel) -> ProfileModel:
        """Store a new profile and return the stored data."""
        ...

    def update_profile(self, profile: ProfileModel) -> ProfileModel | None:
        """Overwrite the record with the same ID."""
        ...

    def delete_profile(self, profile_id: UUID) -> ProfileModel | None:
        """Remove a profile's record."""
        ...

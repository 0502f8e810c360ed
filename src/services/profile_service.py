"""Orchestration of player profile requests to the persistence layer (and the reverse direction)."""

import logging
from uuid import UUID, uuid4

from src.api.models import CreateProfileRequest, ProfileResponse, RenameProfileRequest
from src.core.exceptions import ProfileNotFoundError, RepositoryError
from src.core.models import ProfileModel
from src.db.repository import ProfileRepository
from src.db.schema import utc_now

logger = logging.getLogger(__name__)


class ProfileService:
    """Player profiles: display name and a win/played tally."""

    def __init__(self, repository: ProfileRepository) -> None:
        self.repo = repository

    def create_profile(self, request: CreateProfileRequest) -> ProfileResponse:
        """Display name was already validated by the request model."""
        new_profile = ProfileModel(
            id=uuid4(),
            display_name=request.display_name,
            created_at=utc_now(),
        )
        stored = self.repo.create_profile(new_profile)
        logger.info("created profile %s (%s)", stored.id, stored.display_name)
        return self._create_profile_response(stored)

    def get_profile(self, profile_id: UUID) -> ProfileResponse:
        return self._create_profile_response(self._fetch_profile(profile_id))

    def rename_profile(self, request: RenameProfileRequest) -> ProfileResponse:
        profile = self._fetch_profile(request.profile_id)
        profile.display_name = request.display_name
        return self._create_profile_response(self._store(profile))

    def record_result(self, profile_id: UUID, won: bool) -> ProfileResponse:
        """Count a finished game for the player."""
        profile = self._fetch_profile(profile_id)
        profile.games_played += 1
        if won:
            profile.wins += 1
        return self._create_profile_response(self._store(profile))

    def delete_profile(self, profile_id: UUID) -> None:
        if self.repo.delete_profile(profile_id) is None:
            raise ProfileNotFoundError(f"Profile with {profile_id=} not found.")

    # -- Internal helpers --
    def _fetch_profile(self, profile_id: UUID) -> ProfileModel:
        """Attempt to find the profile in the repository and raise error if it fails."""
        profile = self.repo.get_profile(profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile with {profile_id=} not found.")
        return profile

    def _store(self, profile: ProfileModel) -> ProfileModel:
        updated = self.repo.update_profile(profile)
        if updated is None:
            raise RepositoryError(f"Could not update profile {profile.id}.")
        return updated

    def _create_profile_response(self, profile: ProfileModel) -> ProfileResponse:
        return ProfileResponse(
            id=profile.id,
            display_name=profile.display_name,
            created_at=profile.created_at,
            games_played=profile.games_played,
            wins=profile.wins,
        )

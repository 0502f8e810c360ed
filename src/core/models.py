"""
Boundary layer data model(s).

These objects are used to communicate with the profile Service.
Both the API layer (higher) and db layer (lower) send to/receive from the Service using the model defined here.
(Decouples the SQLAlchemy table from the pydantic response models.)
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class ProfileModel:
    """Transport-safe representation of a player profile."""

    id: UUID
    display_name: str
    created_at: datetime
    games_played: int = 0
    wins: int = 0

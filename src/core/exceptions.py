"""
Exceptions shared by the layers.

NOTE: Illegal moves are NOT exceptions. The engine reports them as a MoveResult with a Reason (see src/engine/validator.py).
These are reserved for malformed requests and for the persistence layer.
"""


class GameError(Exception):
    """Base class of all errors raised on purpose by this package."""


class InvalidRequestError(GameError):
    """A request model received data that cannot be interpreted."""


class RepositoryError(GameError):
    """Something went wrong storing / retrieving data."""


class ProfileNotFoundError(RepositoryError):
    """No player profile stored under the requested id."""

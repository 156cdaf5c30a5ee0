"""Use case for bookmarking shelters per user."""
from __future__ import annotations

from typing import Optional, Protocol

from src.core.entities import Shelter, UserFavorite
from src.core.errors import FavoriteNotFoundError, ShelterNotFoundError


class ShelterLookup(Protocol):
    def get(self, shelter_id: str) -> Optional[Shelter]:
        ...


class FavoriteStore(Protocol):
    def list_by_user(self, user_id: str) -> list[UserFavorite]:
        ...

    def add(self, user_id: str, shelter_id: str) -> UserFavorite:
        ...

    def remove(self, user_id: str, shelter_id: str) -> bool:
        ...


class ManageFavoritesUseCase:
    """Add, list and remove favorites while keeping them tied to known shelters."""

    def __init__(self, favorites: FavoriteStore, shelters: ShelterLookup) -> None:
        self._favorites = favorites
        self._shelters = shelters

    def add(self, user_id: str, shelter_id: str) -> UserFavorite:
        if self._shelters.get(shelter_id) is None:
            raise ShelterNotFoundError(f"Shelter '{shelter_id}' not found")
        return self._favorites.add(user_id, shelter_id)

    def list(self, user_id: str) -> list[UserFavorite]:
        return self._favorites.list_by_user(user_id)

    def shelters(self, user_id: str) -> list[Shelter]:
        """Resolve a user's favorites to shelters, skipping ids no longer stored."""

        resolved = []
        for favorite in self._favorites.list_by_user(user_id):
            shelter = self._shelters.get(favorite.shelter_id)
            if shelter is not None:
                resolved.append(shelter)
        return resolved

    def remove(self, user_id: str, shelter_id: str) -> None:
        if not self._favorites.remove(user_id, shelter_id):
            raise FavoriteNotFoundError(
                f"Shelter '{shelter_id}' is not in the favorites of user '{user_id}'"
            )


__all__ = ["ManageFavoritesUseCase"]

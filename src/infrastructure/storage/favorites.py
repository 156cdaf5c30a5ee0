"""In-memory store of shelters bookmarked by users."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from src.core.entities import UserFavorite
from src.utils.logger import logger


class InMemoryFavoriteRepository:
    """Favorites keyed by id, queried by user."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._favorites: dict[str, UserFavorite] = {}

    def list_by_user(self, user_id: str) -> list[UserFavorite]:
        return [favorite for favorite in self._favorites.values() if favorite.user_id == user_id]

    def add(self, user_id: str, shelter_id: str) -> UserFavorite:
        # A shelter appears at most once in a user's favorites.
        for favorite in self._favorites.values():
            if favorite.user_id == user_id and favorite.shelter_id == shelter_id:
                return favorite

        favorite = UserFavorite(
            id=str(uuid4()), user_id=user_id, shelter_id=shelter_id, created_at=self._clock()
        )
        self._favorites[favorite.id] = favorite
        logger.info("User {} bookmarked shelter {}", user_id, shelter_id)
        return favorite

    def remove(self, user_id: str, shelter_id: str) -> bool:
        for favorite_id, favorite in self._favorites.items():
            if favorite.user_id == user_id and favorite.shelter_id == shelter_id:
                del self._favorites[favorite_id]
                logger.info("User {} removed shelter {} from favorites", user_id, shelter_id)
                return True
        return False


__all__ = ["InMemoryFavoriteRepository"]

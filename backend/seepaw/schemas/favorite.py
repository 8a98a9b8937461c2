"""Favorite Schemas."""

from datetime import datetime

from seepaw.schemas.animal import AnimalSummary


class FavoriteResponse(AnimalSummary):
    favorited_at: datetime

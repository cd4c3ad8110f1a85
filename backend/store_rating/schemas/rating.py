"""
Pydantic schemas for rating submission and the store-owner dashboard.
"""
from typing import Any

from pydantic import BaseModel


class RatingIn(BaseModel):
    rating: Any  # type and 1..5 range checked by submit_rating after the store lookup


class OwnerStatistics(BaseModel):
    totalStores: int
    totalRatings: int
    overallAvgRating: float


class StoreOwnerDashboardOut(BaseModel):
    """
    Store-owner dashboard: owned stores, weighted statistics and the ten
    newest ratings across all owned stores.
    """
    stores: list[dict]
    statistics: OwnerStatistics
    recentRatings: list[dict]


class RatingSubmitOut(BaseModel):
    message: str
    rating: dict
    created: bool

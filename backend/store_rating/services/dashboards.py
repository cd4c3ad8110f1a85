"""
Read-only aggregations: admin totals, store-owner statistics and rating
histories. Nothing here writes to the database.
"""
from decimal import Decimal
from typing import Iterable

from store_rating.core.errors import NotFound
from store_rating.core.pagination import ListParams, paginate, resolve_ordering, search_filter
from store_rating.models import Rating, Store, User
from store_rating.services.ratings import RECENT_RATINGS_LIMIT, round_half_up

RATING_SORT_FIELDS = {
    "createdAt": "created_at",
    "rating": "rating",
}
RATING_SEARCH_FIELDS = ("store__name",)


async def admin_totals() -> dict:
    return {
        "totalUsers": await User.all().count(),
        "totalStores": await Store.all().count(),
        "totalRatings": await Rating.all().count(),
    }


def owner_statistics(stores: Iterable[Store]) -> dict:
    """
    Combine per-store aggregates into owner-wide statistics.

    overallAvgRating is the mean weighted by each store's ratings_count,
    i.e. sum(avg_rating * ratings_count) / sum(ratings_count), 0 without ratings.
    """
    stores = list(stores)
    total_ratings = sum(s.ratings_count for s in stores)
    weighted_sum = sum((Decimal(s.avg_rating) * s.ratings_count for s in stores), Decimal("0"))
    overall = round_half_up(weighted_sum / total_ratings) if total_ratings else Decimal("0.00")
    return {
        "totalStores": len(stores),
        "totalRatings": total_ratings,
        "overallAvgRating": float(overall),
    }


async def owner_dashboard(owner: User) -> tuple[list[Store], dict, list[Rating]]:
    """
    Returns:
        (owned stores, statistics, ten newest ratings across owned stores with user and store)
    """
    stores = await owner_stores(owner)
    recent = []
    if stores:
        recent = (
            await Rating.filter(store_id__in=[s.id for s in stores])
            .order_by("-created_at", "-id")
            .limit(RECENT_RATINGS_LIMIT)
            .prefetch_related("user", "store")
        )
    return stores, owner_statistics(stores), recent


async def owner_stores(owner: User) -> list[Store]:
    return await Store.filter(owner_id=owner.id).order_by("-created_at", "-id")


async def owner_store_ratings(owner: User, store_id: int) -> tuple[Store, list[Rating]]:
    """
    All ratings of one store owned by the caller, newest first.

    Raises:
        NotFound: Store missing or owned by someone else (indistinguishable)
    """
    store = await Store.get_or_none(id=store_id, owner_id=owner.id)
    if not store:
        raise NotFound("Store not found or access denied", code="STORE_NOT_FOUND")
    ratings = await Rating.filter(store_id=store.id).order_by("-created_at", "-id").prefetch_related("user")
    return store, ratings


async def user_rating_history(user: User, params: ListParams) -> tuple[list[Rating], dict]:
    """
    The caller's ratings with store summaries, newest first unless sortBy is given.
    search matches the rated store's name.
    """
    qs = Rating.filter(user_id=user.id).prefetch_related("store")
    condition = search_filter(params.search, RATING_SEARCH_FIELDS)
    if condition is not None:
        qs = qs.filter(condition)
    if params.sort_by is None:
        qs = qs.order_by("-created_at", "-id")
    else:
        qs = qs.order_by(*resolve_ordering(params.sort_by, params.sort_order, RATING_SORT_FIELDS, "createdAt"))
    return await paginate(qs, params)


async def user_ratings_for_stores(user: User, store_ids: Iterable[int]) -> dict[int, int]:
    """Map store_id -> the user's rating value for the given stores (missing when unrated)."""
    store_ids = list(store_ids)
    if not store_ids:
        return {}
    rows = await Rating.filter(user_id=user.id, store_id__in=store_ids).values_list("store_id", "rating")
    return {store_id: value for store_id, value in rows}

"""
Rating aggregation service.

Owns the (user, store) rating upsert and keeps each store's denormalized
avg_rating / ratings_count equal to a fresh recomputation over its Rating
rows. Every write runs inside one transaction that holds a row lock on the
affected store, so concurrent submissions for the same store serialize.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from tortoise.backends.base.client import BaseDBAsyncClient
from tortoise.transactions import in_transaction

from store_rating.core.errors import NotFound, ValidationFailed
from store_rating.models import Rating, Store, User

logger = logging.getLogger("uvicorn.error")

MIN_RATING = 1
MAX_RATING = 5
RECENT_RATINGS_LIMIT = 10
TWO_PLACES = Decimal("0.01")


def round_half_up(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero (4.125 -> 4.13)."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_aggregate(values: Iterable[int]) -> tuple[Decimal, int]:
    """
    Compute (avg_rating, ratings_count) for a store from its rating values.

    Returns:
        (Decimal("0.00"), 0) when there are no ratings, otherwise the mean
        rounded half-up to two decimals and the number of ratings.
    """
    values = list(values)
    count = len(values)
    if count == 0:
        return Decimal("0.00"), 0
    return round_half_up(Decimal(sum(values)) / Decimal(count)), count


def validate_rating_value(value) -> int:
    """Accept only real integers (not bools) in [1, 5]."""
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationFailed.for_field(
            "rating", f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        )
    return value


async def lock_stores(connection: BaseDBAsyncClient, store_ids: Iterable[int]) -> list[Store]:
    """
    SELECT ... FOR UPDATE the given stores inside connection's transaction.
    Rows are locked in id order so two writers never wait on each other crosswise.
    """
    store_ids = sorted(set(store_ids))
    if not store_ids:
        return []
    return await Store.filter(id__in=store_ids).order_by("id").select_for_update().using_db(connection)


async def recompute_store_aggregate(store: Store, connection: BaseDBAsyncClient) -> Store:
    """
    Recompute and persist a store's rating aggregate from its Rating rows.

    Must be called inside the transaction that changed the ratings, after
    the store row has been locked.
    """
    values = await Rating.filter(store_id=store.id).using_db(connection).values_list("rating", flat=True)
    store.avg_rating, store.ratings_count = compute_aggregate(values)
    await store.save(using_db=connection, update_fields=["avg_rating", "ratings_count", "updated_at"])
    logger.info(
        "[ratings] store=%s recomputed avg=%s count=%s",
        store.id, store.avg_rating, store.ratings_count,
    )
    return store


async def submit_rating(user: User, store_id: int, value) -> tuple[Rating, bool]:
    """
    Create or overwrite the caller's rating for a store, then refresh the
    store aggregate.

    Args:
        user: The rating author
        store_id: Target store id
        value: Star rating, integer in [1, 5]

    Returns:
        (rating, created): the upserted row and True when it was newly created

    Raises:
        NotFound: Store does not exist
        ValidationFailed: value is not an integer in [1, 5]
    """
    async with in_transaction() as conn:
        locked = await lock_stores(conn, [store_id])
        if not locked:
            raise NotFound("Store not found", code="STORE_NOT_FOUND")
        store = locked[0]
        value = validate_rating_value(value)

        rating = await Rating.filter(user_id=user.id, store_id=store.id).using_db(conn).first()
        created = rating is None
        if created:
            rating = await Rating.create(user_id=user.id, store_id=store.id, rating=value, using_db=conn)
        else:
            rating.rating = value
            await rating.save(using_db=conn, update_fields=["rating", "updated_at"])

        await recompute_store_aggregate(store, conn)

    logger.info(
        "[ratings] user=%s store=%s rating=%s (%s)",
        user.id, store.id, value, "created" if created else "updated",
    )
    return rating, created

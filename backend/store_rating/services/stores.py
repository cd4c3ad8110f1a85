"""
Store directory service.

CRUD over stores plus the filtered, sorted, paginated listing. Aggregate
fields (avg_rating / ratings_count) are never written here except through
the initial zero values on creation.
"""
import logging
from typing import Optional, Sequence

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from store_rating.core.errors import Conflict, NotFound
from store_rating.core.pagination import ListParams, paginate, resolve_ordering, search_filter
from store_rating.models import Rating, Store, User
from store_rating.services.ratings import RECENT_RATINGS_LIMIT

logger = logging.getLogger("uvicorn.error")

STORE_SORT_FIELDS = {
    "name": "name",
    "email": "email",
    "address": "address",
    "avg_rating": "avg_rating",
    "ratings_count": "ratings_count",
    "createdAt": "created_at",
}
# Admins search every contact field; regular users search name and address only
ADMIN_SEARCH_FIELDS = ("name", "email", "address")
USER_SEARCH_FIELDS = ("name", "address")


async def _ensure_owner(owner_id: int) -> User:
    owner = await User.get_or_none(id=owner_id)
    if not owner:
        raise NotFound("Owner not found", code="OWNER_NOT_FOUND")
    return owner


async def _ensure_email_free(email: str, exclude_id: Optional[int] = None) -> None:
    qs = Store.filter(email=email)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if await qs.exists():
        raise Conflict("Store already exists with this email")


async def get_store(store_id: int) -> Store:
    store = await Store.filter(id=store_id).prefetch_related("owner").first()
    if not store:
        raise NotFound("Store not found", code="STORE_NOT_FOUND")
    return store


async def list_stores(
    params: ListParams,
    search_fields: Sequence[str] = ADMIN_SEARCH_FIELDS,
) -> tuple[list[Store], dict]:
    """
    Filtered, sorted, offset-paginated store listing. Read-only.

    Args:
        params: page / limit / sortBy / sortOrder / search
        search_fields: Fields the search term is matched against (depends on caller role)

    Returns:
        (stores with owner prefetched, page_info)
    """
    qs = Store.all().prefetch_related("owner")
    condition = search_filter(params.search, search_fields)
    if condition is not None:
        qs = qs.filter(condition)
    qs = qs.order_by(*resolve_ordering(params.sort_by, params.sort_order, STORE_SORT_FIELDS, "name"))
    return await paginate(qs, params)


async def create_store(name: str, email: str, address: str, owner_id: int) -> Store:
    """
    Raises:
        NotFound: owner_id does not resolve to a user
        Conflict: Another store already uses the email
    """
    owner = await _ensure_owner(owner_id)
    await _ensure_email_free(email)
    try:
        store = await Store.create(name=name, email=email, address=address, owner=owner)
    except IntegrityError:
        raise Conflict("Store already exists with this email")
    logger.info("[stores] created store id=%s owner=%s", store.id, owner.id)
    return store


async def update_store(
    store_id: int,
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    owner_id: Optional[int] = None,
) -> Store:
    store = await get_store(store_id)

    if owner_id is not None and owner_id != store.owner_id:
        store.owner_id = (await _ensure_owner(owner_id)).id
    if email is not None and email != store.email:
        await _ensure_email_free(email, exclude_id=store.id)
        store.email = email
    if name is not None:
        store.name = name
    if address is not None:
        store.address = address

    try:
        await store.save(update_fields=["name", "email", "address", "owner_id", "updated_at"])
    except IntegrityError:
        raise Conflict("Email already exists")
    return await get_store(store.id)


async def delete_store(store_id: int) -> None:
    async with in_transaction() as conn:
        store = await Store.filter(id=store_id).select_for_update().using_db(conn).first()
        if not store:
            raise NotFound("Store not found", code="STORE_NOT_FOUND")
        await Rating.filter(store_id=store.id).using_db(conn).delete()
        await store.delete(using_db=conn)
    logger.info("[stores] deleted store id=%s", store_id)


async def get_store_detail(store_id: int) -> tuple[Store, list[Rating]]:
    """Return the store (owner prefetched) and its most recent ratings with raters."""
    store = await get_store(store_id)
    ratings = (
        await Rating.filter(store_id=store.id)
        .order_by("-created_at", "-id")
        .limit(RECENT_RATINGS_LIMIT)
        .prefetch_related("user")
    )
    return store, ratings

"""
Account service (credential store).

Registration, authentication, self-service profile and password changes,
and the admin user-management operations. Deleting a user removes their
ratings and owned stores and refreshes every surviving store they had rated.
"""
import logging
from typing import Optional

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from store_rating.core.errors import Conflict, InvalidCredentials, InvalidOperation, NotFound
from store_rating.core.pagination import ListParams, paginate, resolve_ordering, search_filter
from store_rating.core.security import hash_password, verify_password
from store_rating.models import Rating, Role, Store, User
from store_rating.services.ratings import lock_stores, recompute_store_aggregate

logger = logging.getLogger("uvicorn.error")

USER_SORT_FIELDS = {
    "name": "name",
    "email": "email",
    "address": "address",
    "role": "role",
    "createdAt": "created_at",
}
USER_SEARCH_FIELDS = ("name", "email", "address")


async def _ensure_email_free(email: str, exclude_id: Optional[int] = None) -> None:
    qs = User.filter(email=email)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if await qs.exists():
        raise Conflict("User already exists with this email")


async def _create(name: str, email: str, password: str, address: str, role: Role) -> User:
    await _ensure_email_free(email)
    try:
        return await User.create(
            name=name,
            email=email,
            password_hash=hash_password(password),
            address=address,
            role=role,
        )
    except IntegrityError:
        # Lost a race against a concurrent insert of the same email
        raise Conflict("User already exists with this email")


async def get_user(user_id: int) -> User:
    user = await User.get_or_none(id=user_id)
    if not user:
        raise NotFound("User not found", code="USER_NOT_FOUND")
    return user


async def register(name: str, email: str, password: str, address: str) -> User:
    """Public sign-up. The role is always USER."""
    user = await _create(name, email, password, address, Role.USER)
    logger.info("[accounts] registered user id=%s", user.id)
    return user


async def authenticate(email: str, password: str) -> User:
    """
    Resolve a user from email + password.

    Raises:
        InvalidCredentials: Same error for unknown email and wrong password
    """
    user = await User.get_or_none(email=email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


async def update_password(user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise InvalidCredentials("Current password is incorrect", status_code=400)
    user.password_hash = hash_password(new_password)
    await user.save(update_fields=["password_hash", "updated_at"])


async def update_profile(user: User, name: Optional[str] = None, address: Optional[str] = None) -> User:
    if name is not None:
        user.name = name
    if address is not None:
        user.address = address
    await user.save()
    return user


# ========== Admin operations ==========
async def create_user(name: str, email: str, password: str, address: str, role: Role = Role.USER) -> User:
    user = await _create(name, email, password, address, role)
    logger.info("[accounts] admin created user id=%s role=%s", user.id, user.role.value)
    return user


async def update_user(
    actor: User,
    user_id: int,
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    address: Optional[str] = None,
    role: Optional[Role] = None,
    password: Optional[str] = None,
) -> User:
    """
    Admin edit of another account (or their own). Only provided fields change.

    Raises:
        NotFound: Unknown user id
        Conflict: Email already used by a different user
        InvalidOperation: Admin tries to remove their own ADMIN role
    """
    user = await get_user(user_id)

    if email is not None and email != user.email:
        await _ensure_email_free(email, exclude_id=user.id)
        user.email = email

    if role is not None and role != user.role:
        if user.id == actor.id:
            raise InvalidOperation("Cannot change your own role", code="CANNOT_DEMOTE_SELF")
        user.role = role

    if name is not None:
        user.name = name
    if address is not None:
        user.address = address
    if password:
        user.password_hash = hash_password(password)

    try:
        await user.save()
    except IntegrityError:
        raise Conflict("Email already exists")
    return user


async def delete_user(actor: User, user_id: int) -> None:
    """
    Delete an account together with its ratings and the stores it owns.

    Raises:
        NotFound: Unknown user id
        InvalidOperation: Admin tries to delete their own account
    """
    user = await get_user(user_id)
    if user.id == actor.id:
        raise InvalidOperation("Cannot delete your own account", code="CANNOT_DELETE_SELF")

    async with in_transaction() as conn:
        owned_ids = set(await Store.filter(owner_id=user.id).using_db(conn).values_list("id", flat=True))
        rated_ids = set(await Rating.filter(user_id=user.id).using_db(conn).values_list("store_id", flat=True))
        affected = await lock_stores(conn, rated_ids - owned_ids)

        await Rating.filter(user_id=user.id).using_db(conn).delete()
        if owned_ids:
            await Rating.filter(store_id__in=list(owned_ids)).using_db(conn).delete()
            await Store.filter(id__in=list(owned_ids)).using_db(conn).delete()
        await user.delete(using_db=conn)

        for store in affected:
            await recompute_store_aggregate(store, conn)

    logger.info(
        "[accounts] user id=%s deleted by admin id=%s (owned stores=%s, refreshed stores=%s)",
        user_id, actor.id, len(owned_ids), len(affected),
    )


async def list_users(params: ListParams, role: Optional[Role] = None) -> tuple[list[User], dict]:
    qs = User.all()
    condition = search_filter(params.search, USER_SEARCH_FIELDS)
    if condition is not None:
        qs = qs.filter(condition)
    if role is not None:
        qs = qs.filter(role=role)
    qs = qs.order_by(*resolve_ordering(params.sort_by, params.sort_order, USER_SORT_FIELDS, "name"))
    return await paginate(qs, params)


async def get_user_detail(user_id: int) -> tuple[User, list[Store]]:
    """Return the user and the stores they own (empty for non-owners)."""
    user = await get_user(user_id)
    stores = await Store.filter(owner_id=user.id).order_by("name", "id")
    return user, stores

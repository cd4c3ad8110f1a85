from __future__ import annotations

from typing import Optional

from fastapi import (
    APIRouter,
    Depends,
    Query,
    status,
)

from store_rating import services
from store_rating.api.v1.deps import list_params, require_admin
from store_rating.api.v1.serializers import (
    rating_to_dict,
    store_to_dict,
    user_to_dict,
)
from store_rating.core.pagination import ListParams
from store_rating.models.user import Role, User
from store_rating.schemas.admin import (
    AdminDashboardOut,
    AdminUserCreateIn,
    AdminUserUpdateIn,
    StoreCreateIn,
    StoreUpdateIn,
)
from store_rating.schemas.common import MessageOut

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=AdminDashboardOut)
async def dashboard():
    """
    Admin dashboard totals (admin only).

    Returns:
        AdminDashboardOut: totalUsers, totalStores, totalRatings at request time
    """
    return await services.admin_totals()


# ==============================================================================
# I. User Management Interface
#     Prefix: /api/v1/admin/users
# ==============================================================================
@router.get("/users")
async def list_users(
    params: ListParams = Depends(list_params),
    role: Optional[Role] = Query(default=None, description="Exact role filter"),
):
    """
    Get paginated list of users (admin only).

    Supports search over name/email/address, exact role filter, and sorting by
    name, email, address, role or createdAt.

    Returns:
        dict: users (list) and pagination (currentPage, totalPages, totalItems, itemsPerPage)
    """
    users, pagination = await services.list_users(params, role=role)
    return {"users": [user_to_dict(u) for u in users], "pagination": pagination}


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(body: AdminUserCreateIn):
    """
    Create an account with any role (admin only).

    Raises:
        ValidationFailed (400): Field constraints or password policy violated
        Conflict (400): Email already registered
    """
    user = await services.create_user(body.name, body.email, body.password, body.address, body.role)
    return {"message": "User created successfully", "user": user_to_dict(user)}


@router.get("/users/{user_id}")
async def get_user_detail(user_id: int):
    """
    Get a user and the stores they own (admin only).

    Raises:
        NotFound (404): If user not found
    """
    user, stores = await services.get_user_detail(user_id)
    data = user_to_dict(user)
    data["stores"] = [store_to_dict(s) for s in stores]
    return {"user": data}


@router.put("/users/{user_id}")
async def update_user(
    user_id: int,
    body: AdminUserUpdateIn,
    current_admin: User = Depends(require_admin),
):
    """
    Update user information (admin only).

    All fields are optional - only provided fields will be updated. A new
    password, when given, must satisfy the password policy.

    Raises:
        NotFound (404): If user not found
        Conflict (400): Email used by another user
        InvalidOperation (400): Admin changing their own role (CANNOT_DEMOTE_SELF)
    """
    user = await services.update_user(
        current_admin,
        user_id,
        name=body.name,
        email=body.email,
        address=body.address,
        role=body.role,
        password=body.password,
    )
    return {"message": "User updated successfully", "user": user_to_dict(user)}


@router.delete("/users/{user_id}", response_model=MessageOut)
async def delete_user(
    user_id: int,
    current_admin: User = Depends(require_admin),
):
    """
    Delete a user account (admin only).

    Also removes the user's ratings and owned stores; every other store the
    user had rated gets its aggregate recomputed.

    Raises:
        NotFound (404): If user not found
        InvalidOperation (400): Admin deleting their own account (CANNOT_DELETE_SELF)
    """
    await services.delete_user(current_admin, user_id)
    return {"message": "User deleted successfully"}


# ==============================================================================
# II. Store Management Interface
#     Prefix: /api/v1/admin/stores
# ==============================================================================
@router.get("/stores")
async def list_stores(params: ListParams = Depends(list_params)):
    """
    Get paginated list of stores (admin only).

    Search matches name, email and address. Sortable by name, email, address,
    avg_rating, ratings_count or createdAt.
    """
    stores, pagination = await services.list_stores(params)
    return {"stores": [store_to_dict(s, with_owner=True) for s in stores], "pagination": pagination}


@router.post("/stores", status_code=status.HTTP_201_CREATED)
async def create_store(body: StoreCreateIn):
    """
    Create a store (admin only). Aggregate starts at avg_rating 0, ratings_count 0.

    Raises:
        ValidationFailed (400): Name not 20-60 chars, bad email or address
        NotFound (404): owner_id does not exist (OWNER_NOT_FOUND)
        Conflict (400): Store email already used
    """
    store = await services.create_store(body.name, body.email, body.address, body.owner_id)
    return {"message": "Store created successfully", "store": store_to_dict(store)}


@router.get("/stores/{store_id}")
async def get_store_detail(store_id: int):
    """Store with owner summary and its ten most recent ratings (admin only)."""
    store, ratings = await services.get_store_detail(store_id)
    data = store_to_dict(store, with_owner=True)
    data["ratings"] = [rating_to_dict(r, with_user=True) for r in ratings]
    return {"store": data}


@router.put("/stores/{store_id}")
async def update_store(store_id: int, body: StoreUpdateIn):
    """
    Update a store (admin only). Only provided fields change.

    Raises:
        NotFound (404): Store or new owner does not exist
        Conflict (400): Email used by a different store
    """
    store = await services.update_store(
        store_id,
        name=body.name,
        email=body.email,
        address=body.address,
        owner_id=body.owner_id,
    )
    return {"message": "Store updated successfully", "store": store_to_dict(store, with_owner=True)}


@router.delete("/stores/{store_id}", response_model=MessageOut)
async def delete_store(store_id: int):
    await services.delete_store(store_id)
    return {"message": "Store deleted successfully"}

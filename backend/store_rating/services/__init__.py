"""
Services Module

Domain operations behind the REST routers:
- accounts: registration, authentication, password/profile changes, admin user management
- stores: store directory CRUD and listing
- ratings: rating upsert and store aggregate recomputation
- dashboards: read-only admin / store-owner / user aggregations
"""

from .accounts import (
    authenticate,
    create_user,
    delete_user,
    get_user_detail,
    list_users,
    register,
    update_password,
    update_profile,
    update_user,
)
from .stores import (
    create_store,
    delete_store,
    get_store_detail,
    list_stores,
    update_store,
)
from .ratings import (
    compute_aggregate,
    recompute_store_aggregate,
    submit_rating,
)
from .dashboards import (
    admin_totals,
    owner_dashboard,
    owner_store_ratings,
    owner_stores,
    user_rating_history,
    user_ratings_for_stores,
)

__all__ = [
    # Accounts
    "authenticate",
    "create_user",
    "delete_user",
    "get_user_detail",
    "list_users",
    "register",
    "update_password",
    "update_profile",
    "update_user",
    # Stores
    "create_store",
    "delete_store",
    "get_store_detail",
    "list_stores",
    "update_store",
    # Ratings
    "compute_aggregate",
    "recompute_store_aggregate",
    "submit_rating",
    # Dashboards
    "admin_totals",
    "owner_dashboard",
    "owner_store_ratings",
    "owner_stores",
    "user_rating_history",
    "user_ratings_for_stores",
]

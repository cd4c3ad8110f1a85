from typing import Optional

from fastapi import Depends, Header, Query

from store_rating.config import settings
from store_rating.core.errors import Forbidden, Unauthenticated
from store_rating.core.pagination import ListParams
from store_rating.core.security import decode_access_token
from store_rating.models.user import Role, User

async def get_current_user(
    authorization: str | None = Header(default=None),
) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Extracts the bearer token from the Authorization header, validates its
    signature and expiry, and loads the User row named by its userId claim.

    Returns:
        User: The authenticated user object from database

    Raises:
        Unauthenticated (401): If no token is provided (AUTH_REQUIRED)
        Unauthenticated (401): If token is invalid or expired (AUTH_INVALID_TOKEN)
        Unauthenticated (401): If user not found in database (AUTH_USER_NOT_FOUND)

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()

    if not token:
        raise Unauthenticated()

    try:
        payload = decode_access_token(token)
        user_id = int(payload["userId"])
    except Exception:
        raise Unauthenticated("Invalid or expired token", code="AUTH_INVALID_TOKEN")

    user = await User.get_or_none(id=user_id)
    if not user:
        raise Unauthenticated("User no longer exists", code="AUTH_USER_NOT_FOUND")
    return user

def require_roles(*roles: Role):
    """
    Build a dependency that admits only users whose current role is in roles.

    The role is read from the database row rather than the token, so role
    changes made by an admin apply to tokens issued before the change.

    Usage:
        require_admin = require_roles(Role.ADMIN)

        @router.get("/admin/users")
        async def list_users(admin: User = Depends(require_admin)):
            ...
    """
    allowed = frozenset(roles)

    async def _require(current: User = Depends(get_current_user)) -> User:
        if current.role not in allowed:
            raise Forbidden(f"Requires role: {', '.join(sorted(r.value for r in allowed))}")
        return current

    return _require

require_admin = require_roles(Role.ADMIN)
require_store_owner = require_roles(Role.STORE_OWNER)
require_user = require_roles(Role.USER)

def list_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sortBy: Optional[str] = Query(default=None),
    sortOrder: str = Query(default="ASC"),
    search: Optional[str] = Query(default=None, description="Case-insensitive substring search"),
) -> ListParams:
    """FastAPI dependency parsing the shared list query parameters."""
    return ListParams(page=page, limit=limit, sort_by=sortBy, sort_order=sortOrder, search=search)

# store_rating/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating default admin user on first startup.
"""
import logging

from store_rating.config import settings
from store_rating.core.security import hash_password, password_policy_errors
from store_rating.models.user import Role, User

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no admin exists in the database, create a default admin from settings.
    Only takes effect under the following conditions:
      - Currently no user with role=ADMIN
      - ADMIN_PASSWORD is set and satisfies the password policy
    Environment variables:
      ADMIN_NAME     (default: "System Administrator")
      ADMIN_EMAIL    (default: "admin@storeapp.com")
      ADMIN_ADDRESS  (default: "Head office")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    if await User.filter(role=Role.ADMIN).exists():
        return  # Skip creation if admin already exists

    admin_password = settings.admin_password
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    problems = password_policy_errors(admin_password)
    if problems:
        logger.warning("[bootstrap] ADMIN_PASSWORD rejected by password policy: %s", "; ".join(problems))
        return

    # Email is the login identifier; an existing account with it is promoted instead
    existing = await User.get_or_none(email=settings.admin_email)
    if existing:
        existing.role = Role.ADMIN
        await existing.save(update_fields=["role", "updated_at"])
        logger.warning("[bootstrap] Promoted existing account to admin -> email=%s id=%s", existing.email, existing.id)
        return

    u = await User.create(
        name=settings.admin_name,
        email=settings.admin_email,
        password_hash=hash_password(admin_password),
        address=settings.admin_address,
        role=Role.ADMIN,
    )
    logger.warning("[bootstrap] Created default admin -> email=%s id=%s", u.email, u.id)

"""
Pydantic schemas for admin endpoints.
Defines request/response models for user and store management and the admin dashboard.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from store_rating.models.user import Role
from .common import AddressStr, NameStr, PasswordStr, StoreNameStr


# ========== Dashboard ==========
class AdminDashboardOut(BaseModel):
    """Point-in-time totals shown on the admin dashboard."""
    totalUsers: int
    totalStores: int
    totalRatings: int


# ========== Users ==========
class AdminUserCreateIn(BaseModel):
    """
    Request model for admin-created accounts.
    Unlike public registration, any role may be assigned.
    """
    name: NameStr
    email: EmailStr
    password: PasswordStr
    address: AddressStr
    role: Role = Role.USER


class AdminUserUpdateIn(BaseModel):
    """
    Request model for updating user information.
    All fields are optional - only provided fields will be updated.
    """
    name: Optional[NameStr] = None
    email: Optional[EmailStr] = None
    address: Optional[AddressStr] = None
    role: Optional[Role] = None  # Cannot demote yourself
    password: Optional[PasswordStr] = None  # Re-hashed when provided


# ========== Stores ==========
class StoreCreateIn(BaseModel):
    name: StoreNameStr
    email: EmailStr
    address: AddressStr
    owner_id: int = Field(ge=1)


class StoreUpdateIn(BaseModel):
    """Partial store update; aggregate fields are never accepted here."""
    name: Optional[StoreNameStr] = None
    email: Optional[EmailStr] = None
    address: Optional[AddressStr] = None
    owner_id: Optional[int] = Field(default=None, ge=1)

# store_rating/models/user.py
"""
Database model for users.
Represents an account in the system, containing authentication credentials,
profile information, and role-based access control.
"""
from enum import Enum

from tortoise import fields, models


class Role(str, Enum):
    """Closed set of roles checked by the access gate."""
    ADMIN = "ADMIN"
    USER = "USER"
    STORE_OWNER = "STORE_OWNER"


class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Stores as owner (one-to-many, via related_name="stores")
    - Has many Ratings (one-to-many, via related_name="ratings")

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - Email must be unique across all users; it is the login identifier
    - Role determines access level (ADMIN / USER / STORE_OWNER)
    """
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=60)
    email = fields.CharField(max_length=255, unique=True, index=True)  # Login identifier
    password_hash = fields.CharField(max_length=255)  # Argon2 hash, never serialized outward
    address = fields.CharField(max_length=400)
    role = fields.CharEnumField(Role, max_length=16, default=Role.USER)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

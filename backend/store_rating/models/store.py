# store_rating/models/store.py
"""
Database model for stores.
Each store belongs to one owner and carries a denormalized rating aggregate
(avg_rating / ratings_count) derived from its Rating rows.
"""
from decimal import Decimal

from tortoise import fields, models


class Store(models.Model):
    """
    Store database model.

    Relationships:
    - Belongs to an owner User (many-to-one); cascade delete with the owner
    - Has many Ratings (one-to-many, via related_name="ratings")

    avg_rating and ratings_count are written only by the aggregation service.
    """
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=60)
    email = fields.CharField(max_length=255, unique=True, index=True)
    address = fields.CharField(max_length=400)
    owner = fields.ForeignKeyField(
        "models.User",
        related_name="stores",
        on_delete=fields.CASCADE,
    )
    avg_rating = fields.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0.00"))
    ratings_count = fields.IntField(default=0)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "stores"

    def __str__(self) -> str:
        return self.name

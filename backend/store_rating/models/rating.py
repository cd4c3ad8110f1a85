# store_rating/models/rating.py
from tortoise import fields, models

class Rating(models.Model):
    """
    One star rating (1-5) given by a user to a store.
    - (user, store) is unique: resubmitting updates the same row
    - Deleted only through cascades from User or Store
    """
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="ratings", on_delete=fields.CASCADE)
    store = fields.ForeignKeyField("models.Store", related_name="ratings", on_delete=fields.CASCADE)
    rating = fields.SmallIntField()  # 1..5, range checked by the aggregation service

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)  # Refreshed on every resubmission

    class Meta:
        table = "ratings"
        unique_together = (("user", "store"),)

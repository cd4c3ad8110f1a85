"""
Model -> JSON dict conversion shared by the routers.
password_hash is never emitted; avg_rating is emitted as a JSON number.
"""
from typing import Optional

from store_rating.models import Rating, Store, User


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def user_to_dict(u: User) -> dict:
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "address": u.address,
        "role": u.role.value,
        "createdAt": _iso(u.created_at),
        "updatedAt": _iso(u.updated_at),
    }


def user_summary(u: User) -> dict:
    return {"id": u.id, "name": u.name, "email": u.email}


def store_to_dict(s: Store, *, with_owner: bool = False) -> dict:
    data = {
        "id": s.id,
        "name": s.name,
        "email": s.email,
        "address": s.address,
        "owner_id": s.owner_id,
        "avg_rating": float(s.avg_rating or 0),
        "ratings_count": s.ratings_count,
        "createdAt": _iso(s.created_at),
        "updatedAt": _iso(s.updated_at),
    }
    if with_owner:
        data["owner"] = user_summary(s.owner)
    return data


def store_summary(s: Store) -> dict:
    return {"id": s.id, "name": s.name, "address": s.address, "avg_rating": float(s.avg_rating or 0)}


def rating_to_dict(r: Rating, *, with_user: bool = False, with_store: bool = False) -> dict:
    data = {
        "id": r.id,
        "user_id": r.user_id,
        "store_id": r.store_id,
        "rating": r.rating,
        "createdAt": _iso(r.created_at),
        "updatedAt": _iso(r.updated_at),
    }
    if with_user:
        data["user"] = user_summary(r.user)
    if with_store:
        data["store"] = store_summary(r.store)
    return data

from fastapi import APIRouter, Depends

from store_rating import services
from store_rating.api.v1.deps import list_params, require_user
from store_rating.api.v1.serializers import rating_to_dict, store_to_dict
from store_rating.core.pagination import ListParams
from store_rating.models.user import User
from store_rating.schemas.rating import RatingIn, RatingSubmitOut
from store_rating.services.stores import USER_SEARCH_FIELDS

router = APIRouter(prefix="/user", tags=["user"])

# ===== Routes =====
@router.get("/stores")
async def browse_stores(
    params: ListParams = Depends(list_params),
    user: User = Depends(require_user),
):
    """
    Browse stores with search (name/address), sorting and pagination.

    Each store carries userRating: the caller's own rating, or null if the
    caller has not rated it.
    """
    stores, pagination = await services.list_stores(params, search_fields=USER_SEARCH_FIELDS)
    mine = await services.user_ratings_for_stores(user, [s.id for s in stores])
    items = []
    for s in stores:
        data = store_to_dict(s, with_owner=True)
        data["userRating"] = mine.get(s.id)
        items.append(data)
    return {"stores": items, "pagination": pagination}

@router.post("/stores/{store_id}/rating", response_model=RatingSubmitOut)
async def submit_rating(store_id: int, body: RatingIn, user: User = Depends(require_user)):
    """
    Submit or update the caller's rating for a store.

    Repeated submissions overwrite the same row; the store's avg_rating and
    ratings_count are recomputed before the response is sent.

    Raises:
        NotFound (404): Store does not exist
        ValidationFailed (400): rating is not an integer in [1, 5]
    """
    rating, created = await services.submit_rating(user, store_id, body.rating)
    message = "Rating submitted successfully" if created else "Rating updated successfully"
    return {"message": message, "rating": rating_to_dict(rating), "created": created}

@router.get("/ratings")
async def my_ratings(
    params: ListParams = Depends(list_params),
    user: User = Depends(require_user),
):
    """
    Caller's ratings, each with a store summary. Newest first by default;
    sortBy accepts createdAt or rating and search matches the store name.
    """
    ratings, pagination = await services.user_rating_history(user, params)
    return {"ratings": [rating_to_dict(r, with_store=True) for r in ratings], "pagination": pagination}

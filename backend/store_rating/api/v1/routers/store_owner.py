from fastapi import APIRouter, Depends

from store_rating import services
from store_rating.api.v1.deps import require_store_owner
from store_rating.api.v1.serializers import rating_to_dict, store_to_dict
from store_rating.models.user import User
from store_rating.schemas.rating import StoreOwnerDashboardOut

router = APIRouter(prefix="/store-owner", tags=["store-owner"])

@router.get("/dashboard", response_model=StoreOwnerDashboardOut)
async def dashboard(owner: User = Depends(require_store_owner)):
    """
    Ratings overview for every store the caller owns.

    Returns:
        StoreOwnerDashboardOut:
            - stores: owned stores with their aggregates
            - statistics: totalStores, totalRatings, overallAvgRating (weighted by ratings_count)
            - recentRatings: ten newest ratings across owned stores, with rater and store
    """
    stores, statistics, recent = await services.owner_dashboard(owner)
    return {
        "stores": [store_to_dict(s) for s in stores],
        "statistics": statistics,
        "recentRatings": [rating_to_dict(r, with_user=True, with_store=True) for r in recent],
    }

@router.get("/stores")
async def list_owned_stores(owner: User = Depends(require_store_owner)):
    stores = await services.owner_stores(owner)
    return {"stores": [store_to_dict(s) for s in stores]}

@router.get("/stores/{store_id}/ratings")
async def store_ratings(store_id: int, owner: User = Depends(require_store_owner)):
    """
    All ratings of one owned store, newest first.

    Raises:
        NotFound (404): Store missing or owned by someone else
    """
    store, ratings = await services.owner_store_ratings(owner, store_id)
    return {
        "store": store_to_dict(store),
        "ratings": [rating_to_dict(r, with_user=True) for r in ratings],
    }

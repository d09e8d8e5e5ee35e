# marketplace/api/routers/reviews.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_ai_client, get_current_user, get_storage
from marketplace.domain.schemas import Review, ReviewIn, ReviewSummary, ReviewWithUser, User
from marketplace.repos.storage import Storage
from marketplace.services import ai_service
from marketplace.services.review_service import ReviewService

router = APIRouter(tags=["reviews"])


@router.get("/api/products/{slug}/reviews", response_model=List[ReviewWithUser])
def list_reviews(slug: str, storage: Storage = Depends(get_storage)):
    try:
        return ReviewService(storage).list_for_slug(slug)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/api/products/{slug}/reviews/summary", response_model=ReviewSummary)
def review_summary(
    slug: str,
    storage: Storage = Depends(get_storage),
    client=Depends(get_ai_client),
):
    try:
        reviews = ReviewService(storage).list_for_slug(slug)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ai_service.summarize_reviews(client, reviews)


@router.post("/api/reviews", response_model=Review)
def create_review(
    payload: ReviewIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    try:
        return ReviewService(storage).create_review(user, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

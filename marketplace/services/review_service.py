# marketplace/services/review_service.py
from typing import List

from marketplace.domain.schemas import Review, ReviewDraft, ReviewIn, ReviewWithUser, User
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def list_for_slug(self, slug: str) -> List[ReviewWithUser]:
        product = self.storage.get_product_by_slug(slug)
        if not product:
            raise LookupError("Product not found")
        return self.storage.get_product_reviews(product.id)

    def create_review(self, user: User, payload: ReviewIn) -> Review:
        if not self.storage.get_product_by_id(payload.product_id):
            raise LookupError("Product not found")

        review = self.storage.create_review(
            ReviewDraft(
                product_id=payload.product_id,
                user_id=user.id,
                rating=payload.rating,
                comment=payload.comment,
            )
        )
        logger.info(f"Review {review.id} ({review.rating}/5) added to product {payload.product_id}")
        return review

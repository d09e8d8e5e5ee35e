# marketplace/api/routers/ai.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from marketplace.api.deps import get_ai_client, get_storage
from marketplace.domain.schemas import DescriptionIn, DescriptionOut, ProductWithDetails
from marketplace.repos.storage import Storage
from marketplace.services import ai_service

router = APIRouter(tags=["ai"])


@router.post("/api/ai/generate-description", response_model=DescriptionOut)
def generate_description(payload: DescriptionIn, client=Depends(get_ai_client)):
    description = ai_service.generate_description(client, payload.product_name, payload.category)
    return {"description": description}


@router.get("/api/search", response_model=List[ProductWithDetails])
def search(
    q: str = Query(..., min_length=1),
    storage: Storage = Depends(get_storage),
    client=Depends(get_ai_client),
):
    return ai_service.intelligent_search(client, q, storage.get_products())


@router.get("/api/ai/search", response_model=List[ProductWithDetails])
def ai_search(
    query: str = Query(..., min_length=1),
    storage: Storage = Depends(get_storage),
    client=Depends(get_ai_client),
):
    return ai_service.intelligent_search(client, query, storage.get_products())


@router.get("/api/products/{slug}/recommendations", response_model=List[ProductWithDetails])
def recommendations(
    slug: str,
    storage: Storage = Depends(get_storage),
    client=Depends(get_ai_client),
):
    product = storage.get_product_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    candidates = [p for p in storage.get_products() if p.id != product.id]
    return ai_service.recommend_products(client, product.name, candidates)

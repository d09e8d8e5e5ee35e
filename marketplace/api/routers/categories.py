# marketplace/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_storage, require_roles
from marketplace.domain.schemas import Category, CategoryIn, User
from marketplace.repos.storage import Storage
from marketplace.services.product_service import ProductService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[Category])
def list_categories(storage: Storage = Depends(get_storage)):
    return storage.get_categories()


@router.get("/{slug}", response_model=Category)
def get_category(slug: str, storage: Storage = Depends(get_storage)):
    category = storage.get_category_by_slug(slug)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("", response_model=Category, status_code=201)
def create_category(
    payload: CategoryIn,
    user: User = Depends(require_roles("admin")),
    storage: Storage = Depends(get_storage),
):
    try:
        return ProductService(storage).create_category(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

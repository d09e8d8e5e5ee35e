# marketplace/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from marketplace.api.deps import get_current_user, get_storage, require_roles
from marketplace.domain.schemas import (
    Product,
    ProductIn,
    ProductPatchIn,
    ProductWithDetails,
    SuccessOut,
    User,
)
from marketplace.repos.storage import Storage
from marketplace.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductWithDetails])
def list_products(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    seller_id: Optional[str] = Query(None, alias="sellerId"),
    featured: Optional[bool] = Query(None),
    storage: Storage = Depends(get_storage),
):
    return storage.get_products(
        category_id=category_id,
        seller_id=seller_id,
        is_featured=featured,
    )


@router.get("/featured", response_model=List[ProductWithDetails])
def featured_products(storage: Storage = Depends(get_storage)):
    return storage.get_products(is_featured=True)


@router.get("/{slug}", response_model=ProductWithDetails)
def get_product(slug: str, storage: Storage = Depends(get_storage)):
    product = storage.get_product_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product)
def create_product(
    payload: ProductIn,
    user: User = Depends(require_roles("seller", "admin")),
    storage: Storage = Depends(get_storage),
):
    svc = ProductService(storage)
    try:
        return svc.create_product(user, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    payload: ProductPatchIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = ProductService(storage)
    try:
        return svc.update_product(user, product_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{product_id}", response_model=SuccessOut)
def delete_product(
    product_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = ProductService(storage)
    try:
        svc.delete_product(user, product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"success": True}

# marketplace/api/routers/seller.py
from typing import List

from fastapi import APIRouter, Depends

from marketplace.api.deps import get_storage, require_roles
from marketplace.domain.schemas import Order, ProductWithDetails, User
from marketplace.repos.storage import Storage
from marketplace.services.order_service import OrderService

router = APIRouter(prefix="/api/seller", tags=["seller"])


@router.get("/products", response_model=List[ProductWithDetails])
def seller_products(
    user: User = Depends(require_roles("seller")),
    storage: Storage = Depends(get_storage),
):
    return storage.get_products(seller_id=user.id)


@router.get("/orders", response_model=List[Order])
def seller_orders(
    user: User = Depends(require_roles("seller")),
    storage: Storage = Depends(get_storage),
):
    return OrderService(storage).list_for_seller(user)

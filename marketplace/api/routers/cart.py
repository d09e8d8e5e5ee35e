# marketplace/api/routers/cart.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_current_user, get_storage
from marketplace.domain.schemas import (
    CartItem,
    CartItemIn,
    CartItemPatchIn,
    CartItemWithProduct,
    CartSummary,
    SuccessOut,
    User,
)
from marketplace.repos.storage import Storage
from marketplace.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=List[CartItemWithProduct])
def get_cart(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return CartService(storage).get_cart(user.id)


@router.get("/summary", response_model=CartSummary)
def get_cart_summary(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return CartService(storage).get_summary(user.id)


@router.post("", response_model=CartItem)
def add_item(
    payload: CartItemIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = CartService(storage)
    try:
        return svc.add_product(user.id, payload.product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{item_id}", response_model=CartItem)
def update_item(
    item_id: str,
    payload: CartItemPatchIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = CartService(storage)
    try:
        return svc.update_quantity(user.id, item_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{item_id}", response_model=SuccessOut)
def remove_item(
    item_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = CartService(storage)
    try:
        svc.remove_item(user.id, item_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}

# marketplace/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_current_user, get_storage
from marketplace.domain.schemas import SuccessOut, User, WishlistItem, WishlistItemIn, WishlistItemWithProduct
from marketplace.repos.storage import Storage
from marketplace.services.cart_service import CartService

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("", response_model=List[WishlistItemWithProduct])
def get_wishlist(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return CartService(storage).get_wishlist(user.id)


@router.post("", response_model=WishlistItem)
def add_to_wishlist(
    payload: WishlistItemIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    try:
        return CartService(storage).add_to_wishlist(user.id, payload.product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{item_id}", response_model=SuccessOut)
def remove_from_wishlist(
    item_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    try:
        CartService(storage).remove_from_wishlist(user.id, item_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}

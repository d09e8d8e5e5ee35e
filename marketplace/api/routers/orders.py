# marketplace/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_current_user, get_storage
from marketplace.domain.schemas import Order, OrderIn, OrderStatusIn, User
from marketplace.repos.storage import Storage
from marketplace.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[Order])
def list_orders(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_orders(user.id)


@router.post("", response_model=Order, status_code=201)
def create_order(
    payload: OrderIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Tworzy zamówienie ze snapshotem aktualnych produktów.
    """
    svc = OrderService(storage)
    try:
        return svc.create_order(
            user,
            payload.items,
            shipping_address=payload.shipping_address,
            payment_method=payload.payment_method,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = OrderService(storage)
    try:
        return svc.get_order(user, order_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: str,
    payload: OrderStatusIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    svc = OrderService(storage)
    try:
        return svc.update_status(user, order_id, payload.status)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

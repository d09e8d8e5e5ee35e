# marketplace/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_storage, require_roles
from marketplace.domain.schemas import Order, ProductWithDetails, SuccessOut, User, UserPublic
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=List[UserPublic])
def all_users(
    user: User = Depends(require_roles("admin")),
    storage: Storage = Depends(get_storage),
):
    return storage.get_all_users()


@router.delete("/users/{user_id}", response_model=SuccessOut)
def delete_user(
    user_id: str,
    user: User = Depends(require_roles("admin")),
    storage: Storage = Depends(get_storage),
):
    if user_id == user.id:
        raise HTTPException(status_code=400, detail="Admins cannot delete their own account")

    if not storage.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")

    logger.info(f"Admin {user.id} deleted user {user_id}")
    return {"success": True}


@router.get("/products", response_model=List[ProductWithDetails])
def all_products(
    user: User = Depends(require_roles("admin")),
    storage: Storage = Depends(get_storage),
):
    return storage.get_products()


@router.get("/orders", response_model=List[Order])
def all_orders(
    user: User = Depends(require_roles("admin")),
    storage: Storage = Depends(get_storage),
):
    return storage.get_orders()

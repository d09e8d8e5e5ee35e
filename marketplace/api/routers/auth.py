# marketplace/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.deps import get_current_user, get_storage
from marketplace.domain.schemas import AuthOut, LoginIn, ProfileIn, RegisterIn, User, UserPublic
from marketplace.repos.storage import Storage
from marketplace.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthOut)
def register(payload: RegisterIn, storage: Storage = Depends(get_storage)):
    svc = AuthService(storage)
    try:
        user, token = svc.register(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, storage: Storage = Depends(get_storage)):
    svc = AuthService(storage)
    try:
        user, token = svc.login(payload)
    except PermissionError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {"user": user, "token": token}


@router.get("/me", response_model=UserPublic)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserPublic)
def update_me(
    payload: ProfileIn,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    updated = AuthService(storage).update_profile(user, payload)
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return updated

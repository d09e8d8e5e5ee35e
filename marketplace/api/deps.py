# marketplace/api/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from marketplace.domain.schemas import User
from marketplace.repos.database_storage import DatabaseStorage
from marketplace.repos.storage import Storage
from marketplace.utils.security import user_id_from_header


def get_storage(request: Request):
    """
    Backend wybrany raz przy starcie (create_app):
    memory -> jeden MemStorage na proces, database -> DatabaseStorage na sesji per request.
    """
    memory = getattr(request.app.state, "memory_storage", None)
    if memory is not None:
        yield memory
        return

    db = request.app.state.session_factory()
    try:
        yield DatabaseStorage(db)
    finally:
        db.close()


def get_optional_user(
    authorization: Optional[str] = Header(None),
    storage: Storage = Depends(get_storage),
) -> Optional[User]:
    user_id = user_id_from_header(authorization)
    if not user_id:
        return None
    return storage.get_user(user_id)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_roles(*roles: str):
    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user

    return dependency


def get_ai_client(request: Request):
    return request.app.state.ai_client


def get_payment_gateway(request: Request):
    return request.app.state.payment_gateway

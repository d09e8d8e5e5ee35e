# marketplace/services/auth_service.py
from typing import Tuple

from marketplace.domain.schemas import LoginIn, ProfileIn, RegisterIn, User, UserDraft
from marketplace.repos.storage import Storage
from marketplace.utils.logging import get_logger
from marketplace.utils.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)


class AuthService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def register(self, payload: RegisterIn) -> Tuple[User, str]:
        email = str(payload.email)

        if self.storage.get_user_by_email(email):
            raise ValueError("Email already registered")

        user = self.storage.create_user(
            UserDraft(
                email=email,
                password_hash=hash_password(payload.password),
                name=payload.name,
                role=payload.role,
                shop_name=payload.shop_name,
                shop_logo=payload.shop_logo,
            )
        )
        logger.info(f"Registered user {user.id} with role {user.role}")
        return user, self.issue_token(user)

    def login(self, payload: LoginIn) -> Tuple[User, str]:
        user = self.storage.get_user_by_email(str(payload.email))

        # konta z zewnetrznym logowaniem nie maja hasla
        if not user or not user.password_hash:
            raise PermissionError("Invalid credentials")

        if not verify_password(payload.password, user.password_hash):
            raise PermissionError("Invalid credentials")

        return user, self.issue_token(user)

    def update_profile(self, user: User, payload: ProfileIn) -> User:
        fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        if not fields:
            return user
        return self.storage.update_user(user.id, fields)

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(user.id, user.email, user.role)

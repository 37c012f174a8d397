from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.core.security import create_user_access_token, get_password_hash, verify_password
from app.boudoir.db.models import User
from app.boudoir.repos.users import UserRepository


def validate_password_strength(password: str) -> None:
    if len(password) < 8:
        raise AppError(ErrorCatalog.PASSWORD_TOO_SHORT)
    has_letter = any(char.isalpha() for char in password)
    has_digit = any(char.isdigit() for char in password)
    if not (has_letter and has_digit):
        raise AppError(ErrorCatalog.PASSWORD_COMPLEXITY)


class AuthService:
    def __init__(self, db):
        self.repo = UserRepository(db)

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: str = "BUYER",
        location: str | None = None,
        phone: str | None = None,
    ) -> User:
        normalized_email = email.strip().lower()
        if self.repo.get_by_email(normalized_email) is not None:
            raise AppError(ErrorCatalog.EMAIL_ALREADY_REGISTERED)
        validate_password_strength(password)
        user = User(
            name=name.strip(),
            email=normalized_email,
            hashed_password=get_password_hash(password),
            role=role,
            status="ACTIVE",
            is_active=True,
            location=location,
            phone=phone,
        )
        return self.repo.create(user)

    def login(self, email: str, password: str):
        user = self.repo.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise AppError(ErrorCatalog.INVALID_CREDENTIALS)
        self._ensure_user_active(user)
        user = self.repo.record_login(user)
        return user, create_user_access_token(user)

    def change_password(self, user: User, current_password: str, new_password: str) -> User:
        if not verify_password(current_password, user.hashed_password):
            raise AppError(ErrorCatalog.CURRENT_PASSWORD_INVALID)
        if new_password == current_password:
            raise AppError(ErrorCatalog.PASSWORD_MUST_DIFFER)
        validate_password_strength(new_password)
        return self.repo.update_password(user, get_password_hash(new_password))

    @staticmethod
    def _ensure_user_active(user: User) -> None:
        if not user.is_active or user.status != "ACTIVE":
            raise AppError(ErrorCatalog.USER_INACTIVE)

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.core.security import get_password_hash
from app.boudoir.db.models import User
from app.boudoir.repos.users import UserRepository
from app.boudoir.services.auth import validate_password_strength


class UserAdminService:
    def __init__(self, db):
        self.repo = UserRepository(db)

    def list_users(self, **filters):
        return self.repo.list_filtered(**filters)

    def create_user(self, payload) -> User:
        email = payload.email.strip().lower()
        if self.repo.get_by_email(email) is not None:
            raise AppError(ErrorCatalog.EMAIL_ALREADY_REGISTERED)
        validate_password_strength(payload.password)
        return self.repo.create(
            User(
                name=payload.name.strip(),
                email=email,
                hashed_password=get_password_hash(payload.password),
                role=payload.role,
                status="ACTIVE",
                is_active=True,
                location=payload.location,
                phone=payload.phone,
            )
        )

    def update_user(self, actor, user_id, payload) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise AppError(ErrorCatalog.USER_NOT_FOUND)
        if user.id == actor.id:
            # an admin cannot demote or suspend their own account
            raise AppError(ErrorCatalog.PERMISSION_DENIED, details={"reason": "self_update"})
        changes = {}
        if payload.role is not None:
            changes["role"] = payload.role
        if payload.status is not None:
            changes["status"] = payload.status
            changes["is_active"] = payload.status == "ACTIVE"
        return self.repo.update(user, **changes)


class ProfileService:
    """Self-service edits of name, phone and location."""

    def __init__(self, db):
        self.repo = UserRepository(db)

    def update(self, user, payload) -> User:
        changes = {
            key: value.strip() if isinstance(value, str) else value
            for key, value in payload.model_dump(exclude_unset=True).items()
        }
        if changes.get("name") is None:
            changes.pop("name", None)
        phone = changes.get("phone")
        if phone and phone != user.phone:
            holder = self.repo.get_by_phone(phone)
            if holder is not None and holder.id != user.id:
                raise AppError(ErrorCatalog.PHONE_ALREADY_USED)
        if not changes:
            return user
        return self.repo.update(user, **changes)

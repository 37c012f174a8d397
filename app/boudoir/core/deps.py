import uuid

from fastapi import Depends
from jose import JWTError
from pydantic import ValidationError

from app.boudoir.core.error_catalog import AppError, ErrorCatalog
from app.boudoir.core.metrics import metrics
from app.boudoir.core.security import TokenData, decode_token, oauth2_scheme, optional_oauth2_scheme
from app.boudoir.db.session import get_db
from app.boudoir.repos.users import UserRepository


def get_current_token_data(token: str = Depends(oauth2_scheme)) -> TokenData:
    try:
        payload = decode_token(token)
        return TokenData(**payload)
    except (JWTError, ValidationError, TypeError) as exc:
        raise AppError(ErrorCatalog.INVALID_TOKEN) from exc


def get_current_user(token_data: TokenData = Depends(get_current_token_data), db=Depends(get_db)):
    try:
        user_id = uuid.UUID(token_data.sub)
    except ValueError as exc:
        raise AppError(ErrorCatalog.INVALID_TOKEN) from exc

    repo = UserRepository(db)
    user = repo.get_by_id(user_id)
    if user is None:
        raise AppError(ErrorCatalog.INVALID_TOKEN)
    return user


def get_optional_user(token: str | None = Depends(optional_oauth2_scheme), db=Depends(get_db)):
    if not token:
        return None
    try:
        user = get_current_user(get_current_token_data(token), db)
    except AppError:
        return None
    if not user.is_active or user.status != "ACTIVE":
        return None
    return user


def require_active_user(user=Depends(get_current_user)):
    if not user.is_active or user.status != "ACTIVE":
        raise AppError(ErrorCatalog.USER_INACTIVE)
    return user


def require_roles(*roles: str):
    allowed = {role.upper() for role in roles}

    def dependency(user=Depends(require_active_user)):
        if user.role not in allowed:
            metrics.increment_permission_denied()
            raise AppError(ErrorCatalog.PERMISSION_DENIED, details={"required_roles": sorted(allowed)})
        return user

    return dependency


__all__ = [
    "get_current_token_data",
    "get_current_user",
    "get_optional_user",
    "require_active_user",
    "require_roles",
]

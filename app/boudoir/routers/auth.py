from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from app.boudoir.core.deps import require_active_user
from app.boudoir.core.error_catalog import AppError
from app.boudoir.db.session import get_db
from app.boudoir.repos.users import UserRepository
from app.boudoir.schemas.auth import (
    ChangePasswordRequest,
    ChangePasswordResponse,
    LoginRequest,
    OAuth2TokenResponse,
    RegisterRequest,
    TokenResponse,
    UserOut,
    UserResponse,
)
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201, summary="Register a buyer or seller")
def register(request: Request, payload: RegisterRequest, db=Depends(get_db)):
    trace_id = getattr(request.state, "trace_id", "")
    user = AuthService(db).register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        location=payload.location,
        phone=payload.phone,
    )
    ActivityService(db).record(
        ActivityEvent(user_id=user.id, action="REGISTER", entity_type="user", entity_id=str(user.id), trace_id=trace_id)
    )
    return UserResponse(user=UserOut.model_validate(user), trace_id=trace_id)


@router.post("/login", response_model=TokenResponse, summary="Login (JSON)")
def login(request: Request, payload: LoginRequest, db=Depends(get_db)):
    trace_id = getattr(request.state, "trace_id", "")
    activity = ActivityService(db)
    try:
        user, token = AuthService(db).login(payload.email, payload.password)
    except AppError as exc:
        candidate = UserRepository(db).get_by_email(payload.email)
        if candidate is not None:
            activity.record(
                ActivityEvent(
                    user_id=candidate.id,
                    action="LOGIN_FAILED",
                    entity_type="user",
                    entity_id=str(candidate.id),
                    metadata={"error_code": exc.error.code},
                    trace_id=trace_id,
                )
            )
        raise
    activity.record(
        ActivityEvent(user_id=user.id, action="LOGIN", entity_type="user", entity_id=str(user.id), trace_id=trace_id)
    )
    return TokenResponse(access_token=token, user=UserOut.model_validate(user), trace_id=trace_id)


@router.post(
    "/token",
    response_model=OAuth2TokenResponse,
    summary="OAuth2 Token (Swagger/Auth)",
    description="OAuth2 password flow using form-data username (email) and password.",
)
async def oauth2_token(request: Request, db=Depends(get_db)):
    raw_body = (await request.body()).decode()
    form_data = parse_qs(raw_body)
    username = (form_data.get("username") or [""])[0]
    password = (form_data.get("password") or [""])[0]
    _, token = await run_in_threadpool(AuthService(db).login, username, password)
    return OAuth2TokenResponse(access_token=token)


@router.get("/me", response_model=UserResponse)
def me(request: Request, current_user=Depends(require_active_user)):
    return UserResponse(user=UserOut.model_validate(current_user), trace_id=getattr(request.state, "trace_id", ""))


@router.post("/change-password", response_model=ChangePasswordResponse)
def change_password(
    request: Request,
    payload: ChangePasswordRequest,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    AuthService(db).change_password(current_user, payload.current_password, payload.new_password)
    return ChangePasswordResponse(
        ok=True,
        message="Password updated successfully",
        trace_id=getattr(request.state, "trace_id", ""),
    )

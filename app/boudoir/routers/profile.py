from fastapi import APIRouter, Depends, Request

from app.boudoir.core.deps import require_active_user
from app.boudoir.db.session import get_db
from app.boudoir.schemas.auth import ProfileUpdateRequest, UserOut, UserResponse
from app.boudoir.services.activity import ActivityEvent, ActivityService
from app.boudoir.services.users import ProfileService

router = APIRouter()


@router.get("/user/profile", response_model=UserResponse)
def get_profile(request: Request, current_user=Depends(require_active_user)):
    return UserResponse(user=UserOut.model_validate(current_user), trace_id=getattr(request.state, "trace_id", ""))


@router.patch("/user/profile", response_model=UserResponse)
def update_profile(
    request: Request,
    payload: ProfileUpdateRequest,
    current_user=Depends(require_active_user),
    db=Depends(get_db),
):
    trace_id = getattr(request.state, "trace_id", "")
    user = ProfileService(db).update(current_user, payload)
    ActivityService(db).record(
        ActivityEvent(
            user_id=user.id,
            action="PROFILE_UPDATE",
            entity_type="user",
            entity_id=str(user.id),
            metadata={"fields": sorted(payload.model_dump(exclude_unset=True))},
            trace_id=trace_id,
        )
    )
    return UserResponse(user=UserOut.model_validate(user), trace_id=trace_id)

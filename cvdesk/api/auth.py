from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cvdesk import auth
from cvdesk.auth import bearer_token, get_current_user, get_settings
from cvdesk.config import Settings
from cvdesk.database import get_db
from cvdesk.models.user import UserProfile
from cvdesk.schemas.auth import AuthResponse, LoginRequest, PermissionsResponse, ViewAccessResponse
from cvdesk.schemas.user_profile import UserProfileOut
from cvdesk.services import permissions


router = APIRouter()


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    user, token = auth.login(db, payload.username, payload.password, settings)
    return AuthResponse(access_token=token, user=UserProfileOut.model_validate(user))


@router.get("/user", response_model=UserProfileOut)
def current_user_profile(current_user: UserProfile = Depends(get_current_user)) -> UserProfile:
    return current_user


@router.post("/logout")
def logout(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict[str, str]:
    auth.logout(db, token, settings)
    return {"message": "Logged out successfully"}


@router.get("/permissions", response_model=PermissionsResponse)
def my_permissions(current_user: UserProfile = Depends(get_current_user)) -> PermissionsResponse:
    return PermissionsResponse(
        role=current_user.role,
        capabilities=permissions.capabilities_for(current_user.role).as_dict(),
        views=permissions.view_access_for(current_user.role),
    )


@router.get("/views/{view}", response_model=ViewAccessResponse)
def view_access(view: str, current_user: UserProfile = Depends(get_current_user)) -> ViewAccessResponse:
    permissions.require_view(current_user.role, view)
    return ViewAccessResponse(view=permissions.normalize_view(view), allowed=True)

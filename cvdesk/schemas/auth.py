from __future__ import annotations

from pydantic import BaseModel

from cvdesk.schemas.user_profile import UserProfileOut


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfileOut


class PermissionsResponse(BaseModel):
    role: str
    capabilities: dict[str, bool]
    views: dict[str, bool]


class ViewAccessResponse(BaseModel):
    view: str
    allowed: bool

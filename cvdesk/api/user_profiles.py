from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from cvdesk.api.deps import get_user_profile_service, read_json_object, require_capability
from cvdesk.auth import get_current_user
from cvdesk.models.user import UserProfile
from cvdesk.schemas.user_profile import UserProfileFilter, UserProfileOut
from cvdesk.services.user_profiles import UserProfileService


router = APIRouter()


def _create(service: UserProfileService, actor: UserProfile, data: dict[str, Any]) -> UserProfileOut:
    return UserProfileOut.model_validate(service.create(actor, data))


def _update(service: UserProfileService, actor: UserProfile, user_id: int, data: dict[str, Any]) -> UserProfileOut:
    return UserProfileOut.model_validate(service.update(actor, user_id, data))


@router.get("", response_model=list[UserProfileOut])
def list_user_profiles(
    filters: UserProfileFilter = Depends(),
    service: UserProfileService = Depends(get_user_profile_service),
    current_user: UserProfile = Depends(get_current_user),
) -> list[UserProfile]:
    return service.list(current_user, filters)


@router.post("", response_model=UserProfileOut, status_code=status.HTTP_201_CREATED)
async def create_user_profile(
    request: Request,
    service: UserProfileService = Depends(get_user_profile_service),
    current_user: UserProfile = Depends(require_capability("can_create_users")),
) -> UserProfileOut:
    payload = await read_json_object(request)
    return await run_in_threadpool(_create, service, current_user, payload)


@router.get("/{user_id}", response_model=UserProfileOut)
def get_user_profile(
    user_id: int,
    service: UserProfileService = Depends(get_user_profile_service),
    current_user: UserProfile = Depends(get_current_user),
) -> UserProfile:
    return service.get(current_user, user_id)


@router.put("/{user_id}", response_model=UserProfileOut)
async def update_user_profile(
    user_id: int,
    request: Request,
    service: UserProfileService = Depends(get_user_profile_service),
    current_user: UserProfile = Depends(require_capability("can_edit_users")),
) -> UserProfileOut:
    payload = await read_json_object(request)
    return await run_in_threadpool(_update, service, current_user, user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_profile(
    user_id: int,
    service: UserProfileService = Depends(get_user_profile_service),
    current_user: UserProfile = Depends(get_current_user),
) -> Response:
    service.delete(current_user, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

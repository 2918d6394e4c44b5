from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from cvdesk.api.deps import read_json_object, require_capability
from cvdesk.auth import get_current_user
from cvdesk.database import get_db
from cvdesk.models.user import UserProfile
from cvdesk.services.catalog import POSITIONS_ROLES, QUALIFICATIONS, TENDERS, CatalogPolicy, CatalogService


def build_router(policy: CatalogPolicy) -> APIRouter:
    """CRUD routes for one catalog table."""
    router = APIRouter()
    out_schema = policy.out_schema

    def get_service(db: Session = Depends(get_db)) -> CatalogService:
        return CatalogService(db, policy)

    def _create(service: CatalogService, actor: UserProfile, data: dict[str, Any]) -> Any:
        return out_schema.model_validate(service.create(actor, data))

    def _update(service: CatalogService, actor: UserProfile, item_id: int, data: dict[str, Any]) -> Any:
        return out_schema.model_validate(service.update(actor, item_id, data))

    @router.get("", response_model=list[out_schema])
    def list_items(
        active_only: bool = Query(False),
        service: CatalogService = Depends(get_service),
        current_user: UserProfile = Depends(get_current_user),
    ) -> list[Any]:
        return service.list(current_user, active_only=active_only)

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    async def create_item(
        request: Request,
        service: CatalogService = Depends(get_service),
        current_user: UserProfile = Depends(require_capability(policy.manage_capability)),
    ) -> Any:
        payload = await read_json_object(request)
        return await run_in_threadpool(_create, service, current_user, payload)

    @router.get("/{item_id}", response_model=out_schema)
    def get_item(
        item_id: int,
        service: CatalogService = Depends(get_service),
        current_user: UserProfile = Depends(get_current_user),
    ) -> Any:
        return service.get(current_user, item_id)

    @router.put("/{item_id}", response_model=out_schema)
    async def update_item(
        item_id: int,
        request: Request,
        service: CatalogService = Depends(get_service),
        current_user: UserProfile = Depends(require_capability(policy.manage_capability)),
    ) -> Any:
        payload = await read_json_object(request)
        return await run_in_threadpool(_update, service, current_user, item_id, payload)

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_item(
        item_id: int,
        service: CatalogService = Depends(get_service),
        current_user: UserProfile = Depends(get_current_user),
    ) -> Response:
        service.delete(current_user, item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


qualifications_router = build_router(QUALIFICATIONS)
positions_roles_router = build_router(POSITIONS_ROLES)
tenders_router = build_router(TENDERS)

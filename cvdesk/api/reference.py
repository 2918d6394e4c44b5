from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from cvdesk.auth import get_current_user
from cvdesk.services import reference_data


router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/languages")
def languages() -> list[str]:
    return reference_data.LANGUAGES


@router.get("/genders")
def genders() -> list[str]:
    return reference_data.GENDERS


@router.get("/sap-k-levels")
def sap_k_levels() -> list[str]:
    return reference_data.SAP_K_LEVELS


@router.get("/departments")
def departments() -> list[str]:
    return reference_data.DEPARTMENTS


@router.get("/roles")
def roles(department: str | None = Query(None)) -> list[dict[str, str]]:
    return reference_data.roles_for_department(department)


@router.get("/qualification-types")
def qualification_types() -> dict[str, list[str]]:
    return reference_data.QUALIFICATION_MAPPINGS

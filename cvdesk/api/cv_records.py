from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, HTMLResponse

from cvdesk.api.deps import get_cv_record_service, read_submission, require_capability
from cvdesk.auth import get_current_user
from cvdesk.models.cv_record import CVRecord
from cvdesk.models.user import UserProfile
from cvdesk.schemas.cv_record import CVRecordFilter, CVRecordOut
from cvdesk.services.blob_store import Upload
from cvdesk.services.cv_records import CVRecordService


router = APIRouter()


@router.get("", response_model=list[CVRecordOut])
def list_cv_records(
    filters: CVRecordFilter = Depends(),
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(get_current_user),
) -> list[CVRecord]:
    return service.list(current_user, filters)


@router.get("/export/csv")
def export_cv_records(
    filters: CVRecordFilter = Depends(),
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(get_current_user),
) -> Response:
    content = service.export_csv(current_user, filters)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="cv-records.csv"'},
    )


def _create(service: CVRecordService, actor: UserProfile, data: dict, upload: Upload | None) -> CVRecordOut:
    return CVRecordOut.model_validate(service.create(actor, data, upload))


def _update(
    service: CVRecordService, actor: UserProfile, record_id: int, data: dict, upload: Upload | None
) -> CVRecordOut:
    return CVRecordOut.model_validate(service.update(actor, record_id, data, upload))


@router.post("", response_model=CVRecordOut, status_code=status.HTTP_201_CREATED)
async def create_cv_record(
    request: Request,
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(require_capability("can_capture_records")),
) -> CVRecordOut:
    data, upload = await read_submission(request)
    return await run_in_threadpool(_create, service, current_user, data, upload)


@router.get("/{record_id}", response_model=CVRecordOut)
def get_cv_record(
    record_id: int,
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(get_current_user),
) -> CVRecord:
    return service.get(current_user, record_id)


@router.put("/{record_id}", response_model=CVRecordOut)
async def update_cv_record(
    record_id: int,
    request: Request,
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(require_capability("can_edit_cvs")),
) -> CVRecordOut:
    data, upload = await read_submission(request)
    return await run_in_threadpool(_update, service, current_user, record_id, data, upload)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cv_record(
    record_id: int,
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(get_current_user),
) -> Response:
    service.delete(current_user, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{record_id}/file")
def download_cv_file(
    record_id: int,
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(get_current_user),
) -> FileResponse:
    path = service.file_path(current_user, record_id)
    return FileResponse(path, filename=path.name.split("_", 1)[-1])


@router.get("/{record_id}/document", response_class=HTMLResponse)
def download_cv_document(
    record_id: int,
    service: CVRecordService = Depends(get_cv_record_service),
    current_user: UserProfile = Depends(get_current_user),
) -> HTMLResponse:
    filename, html = service.render_document(current_user, record_id)
    return HTMLResponse(content=html, headers={"Content-Disposition": f'inline; filename="{filename}"'})

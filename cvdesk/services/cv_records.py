from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from cvdesk.database import transaction
from cvdesk.errors import NotFoundError
from cvdesk.models.cv_record import CVRecord
from cvdesk.models.user import UserProfile
from cvdesk.schemas.cv_record import CVRecordCreate, CVRecordFilter, CVRecordOut, CVRecordUpdate
from cvdesk.services import permissions
from cvdesk.services.audit import AuditRecorder
from cvdesk.services.blob_store import BlobStore, Upload
from cvdesk.services.csv_export import render_cv_records_csv
from cvdesk.services.cv_document import document_filename, render_cv_document
from cvdesk.services.payloads import snapshot, validate_payload


logger = logging.getLogger(__name__)

TABLE_NAME = "cv_records"

SEARCH_COLUMNS = (CVRecord.name, CVRecord.surname, CVRecord.email, CVRecord.position, CVRecord.department)


def _contains(value: str) -> str:
    return f"%{value.strip()}%"


def _full_name(record: CVRecord) -> str:
    return " ".join(part for part in (record.name, record.surname) if part)


def apply_filters(query: Query, filters: CVRecordFilter) -> Query:
    if filters.search and filters.search.strip():
        pattern = _contains(filters.search)
        query = query.filter(or_(*(column.ilike(pattern) for column in SEARCH_COLUMNS)))
    if filters.status and filters.status.strip().lower() != "all":
        query = query.filter(CVRecord.status == filters.status.strip())

    if filters.department:
        query = query.filter(CVRecord.department == filters.department)
    if filters.role:
        query = query.filter(CVRecord.position == filters.role)
    if filters.role_title:
        query = query.filter(CVRecord.role_title == filters.role_title)
    if filters.sap_k_level:
        query = query.filter(CVRecord.sap_k_level == filters.sap_k_level)
    if filters.experience is not None:
        query = query.filter(CVRecord.experience == filters.experience)

    if filters.name:
        query = query.filter(CVRecord.name.ilike(_contains(filters.name)))
    if filters.surname:
        query = query.filter(CVRecord.surname.ilike(_contains(filters.surname)))
    if filters.id_passport:
        query = query.filter(CVRecord.id_passport.ilike(_contains(filters.id_passport)))
    if filters.language:
        query = query.filter(CVRecord.languages.ilike(_contains(filters.language)))
    if filters.qualification:
        pattern = _contains(filters.qualification)
        query = query.filter(
            or_(
                CVRecord.qualifications.ilike(pattern),
                CVRecord.qualification_name.ilike(pattern),
                CVRecord.qualification_type.ilike(pattern),
            )
        )
    return query


class CVRecordService:
    def __init__(self, db: Session, blob_store: BlobStore) -> None:
        self.db = db
        self.blob_store = blob_store
        self.audit = AuditRecorder(db)

    def _load(self, record_id: int) -> CVRecord:
        record = self.db.get(CVRecord, record_id)
        if record is None:
            raise NotFoundError("CV record", record_id)
        return record

    def _discard_upload(self, reference: str | None) -> None:
        if reference and not self.blob_store.delete(reference):
            logger.warning("Orphaned upload %s could not be removed", reference)

    def create(self, actor: UserProfile, data: Any, upload: Upload | None = None) -> CVRecord:
        permissions.require(actor.role, "can_capture_records")
        payload = validate_payload(CVRecordCreate, data)
        if upload is not None:
            self.blob_store.validate(upload)

        reference = self.blob_store.store(upload) if upload is not None else None
        try:
            with transaction(self.db):
                record = CVRecord(**payload.model_dump())
                record.submitted_at = datetime.now(timezone.utc).replace(tzinfo=None)
                record.cv_file = reference
                self.db.add(record)
                self.db.flush()
                self.audit.record(
                    "CREATE",
                    TABLE_NAME,
                    record.id,
                    actor,
                    new_values=snapshot(CVRecordOut, record),
                    description=f"Created CV record for: {_full_name(record)}",
                )
        except Exception:
            self._discard_upload(reference)
            raise

        logger.info("CV record %s created by %s", record.id, actor.username)
        return record

    def get(self, actor: UserProfile, record_id: int) -> CVRecord:
        permissions.require(actor.role, "can_view_all_cvs")
        return self._load(record_id)

    def list(self, actor: UserProfile, filters: Any = None) -> list[CVRecord]:
        permissions.require(actor.role, "can_view_all_cvs")
        criteria = validate_payload(CVRecordFilter, filters)
        query = apply_filters(self.db.query(CVRecord), criteria)
        return query.order_by(CVRecord.submitted_at.desc(), CVRecord.id.desc()).all()

    def update(self, actor: UserProfile, record_id: int, data: Any, upload: Upload | None = None) -> CVRecord:
        permissions.require(actor.role, "can_edit_cvs")
        payload = validate_payload(CVRecordUpdate, data)
        if upload is not None:
            self.blob_store.validate(upload)
        record = self._load(record_id)

        old_values = snapshot(CVRecordOut, record)
        previous_file = record.cv_file
        reference = self.blob_store.store(upload) if upload is not None else None
        try:
            with transaction(self.db):
                for key, value in payload.model_dump(exclude_unset=True).items():
                    setattr(record, key, value)
                if reference is not None:
                    record.cv_file = reference
                self.db.flush()
                self.audit.record(
                    "UPDATE",
                    TABLE_NAME,
                    record.id,
                    actor,
                    old_values=old_values,
                    new_values=snapshot(CVRecordOut, record),
                    description=f"Updated CV record for: {_full_name(record)}",
                )
        except Exception:
            self._discard_upload(reference)
            raise

        if reference is not None and previous_file:
            self.blob_store.delete(previous_file)
        logger.info("CV record %s updated by %s", record_id, actor.username)
        return record

    def delete(self, actor: UserProfile, record_id: int) -> None:
        permissions.require(actor.role, "can_delete_cvs")
        record = self._load(record_id)
        old_values = snapshot(CVRecordOut, record)
        description = f"Deleted CV record for: {_full_name(record)}"
        cv_file = record.cv_file

        with transaction(self.db):
            self.db.delete(record)
            self.db.flush()
            self.audit.record("DELETE", TABLE_NAME, record_id, actor, old_values=old_values, description=description)

        if cv_file and not self.blob_store.delete(cv_file):
            logger.warning("CV record %s deleted but file %s was not removed", record_id, cv_file)
        logger.info("CV record %s deleted by %s", record_id, actor.username)

    def export_csv(self, actor: UserProfile, filters: Any = None) -> str:
        records = self.list(actor, filters)
        logger.info("Exporting %d CV records for %s", len(records), actor.username)
        return render_cv_records_csv(records)

    def render_document(self, actor: UserProfile, record_id: int) -> tuple[str, str]:
        record = self.get(actor, record_id)
        return document_filename(record), render_cv_document(record)

    def file_path(self, actor: UserProfile, record_id: int) -> Path:
        record = self.get(actor, record_id)
        if not record.cv_file:
            raise NotFoundError("CV file for record", record_id)
        path = self.blob_store.path_for(record.cv_file)
        if path is None or self.blob_store.info(record.cv_file) is None:
            raise NotFoundError("CV file for record", record_id)
        return path

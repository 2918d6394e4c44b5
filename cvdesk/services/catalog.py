"""Reference catalogs maintained by administrators: qualifications, positions and tenders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy.orm import Session

from cvdesk.database import Base, transaction
from cvdesk.errors import NotFoundError
from cvdesk.models.position_role import PositionRole
from cvdesk.models.qualification import Qualification
from cvdesk.models.tender import Tender
from cvdesk.models.user import UserProfile
from cvdesk.schemas.catalog import (
    PositionRoleCreate,
    PositionRoleOut,
    PositionRoleUpdate,
    QualificationCreate,
    QualificationOut,
    QualificationUpdate,
    TenderCreate,
    TenderOut,
    TenderUpdate,
)
from cvdesk.services import permissions
from cvdesk.services.audit import AuditRecorder
from cvdesk.services.payloads import snapshot, validate_payload


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogPolicy:
    table_name: str
    label: str
    model: type[Base]
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    out_schema: type[BaseModel]
    title_field: str
    order_by: str
    # None means any authenticated caller may read.
    read_capability: str | None
    manage_capability: str
    delete_capability: str
    stamp_creator: bool = False


QUALIFICATIONS = CatalogPolicy(
    table_name="qualifications",
    label="Qualification",
    model=Qualification,
    create_schema=QualificationCreate,
    update_schema=QualificationUpdate,
    out_schema=QualificationOut,
    title_field="name",
    order_by="name",
    read_capability=None,
    manage_capability="can_manage_qualifications",
    delete_capability="can_delete_qualifications",
)

POSITIONS_ROLES = CatalogPolicy(
    table_name="positions_roles",
    label="Position",
    model=PositionRole,
    create_schema=PositionRoleCreate,
    update_schema=PositionRoleUpdate,
    out_schema=PositionRoleOut,
    title_field="role_name",
    order_by="department",
    read_capability=None,
    manage_capability="can_manage_positions",
    delete_capability="can_delete_positions",
)

TENDERS = CatalogPolicy(
    table_name="tenders",
    label="Tender",
    model=Tender,
    create_schema=TenderCreate,
    update_schema=TenderUpdate,
    out_schema=TenderOut,
    title_field="title",
    order_by="created_at",
    read_capability="can_manage_tenders",
    manage_capability="can_manage_tenders",
    delete_capability="can_manage_tenders",
    stamp_creator=True,
)


class CatalogService:
    def __init__(self, db: Session, policy: CatalogPolicy) -> None:
        self.db = db
        self.policy = policy
        self.audit = AuditRecorder(db)

    def _load(self, item_id: int) -> Any:
        item = self.db.get(self.policy.model, item_id)
        if item is None:
            raise NotFoundError(self.policy.label, item_id)
        return item

    def _title(self, item: Any) -> str:
        return str(getattr(item, self.policy.title_field))

    def list(self, actor: UserProfile, active_only: bool = False) -> list[Any]:
        if self.policy.read_capability is not None:
            permissions.require(actor.role, self.policy.read_capability)
        model = self.policy.model
        query = self.db.query(model)
        if active_only and hasattr(model, "is_active"):
            query = query.filter(model.is_active.is_(True))
        order_column = getattr(model, self.policy.order_by)
        if self.policy.order_by == "created_at":
            order_column = order_column.desc()
        return query.order_by(order_column, model.id.desc()).all()

    def get(self, actor: UserProfile, item_id: int) -> Any:
        if self.policy.read_capability is not None:
            permissions.require(actor.role, self.policy.read_capability)
        return self._load(item_id)

    def create(self, actor: UserProfile, data: Any) -> Any:
        permissions.require(actor.role, self.policy.manage_capability)
        payload = validate_payload(self.policy.create_schema, data)

        with transaction(self.db):
            item = self.policy.model(**payload.model_dump())
            if self.policy.stamp_creator:
                item.created_by = actor.id
            self.db.add(item)
            self.db.flush()
            self.audit.record(
                "CREATE",
                self.policy.table_name,
                item.id,
                actor,
                new_values=snapshot(self.policy.out_schema, item),
                description=f"Created {self.policy.label.lower()}: {self._title(item)}",
            )

        logger.info("%s %s created by %s", self.policy.label, item.id, actor.username)
        return item

    def update(self, actor: UserProfile, item_id: int, data: Any) -> Any:
        permissions.require(actor.role, self.policy.manage_capability)
        payload = validate_payload(self.policy.update_schema, data)
        item = self._load(item_id)
        old_values = snapshot(self.policy.out_schema, item)

        with transaction(self.db):
            for key, value in payload.model_dump(exclude_unset=True).items():
                setattr(item, key, value)
            self.db.flush()
            self.audit.record(
                "UPDATE",
                self.policy.table_name,
                item.id,
                actor,
                old_values=old_values,
                new_values=snapshot(self.policy.out_schema, item),
                description=f"Updated {self.policy.label.lower()}: {self._title(item)}",
            )

        logger.info("%s %s updated by %s", self.policy.label, item_id, actor.username)
        return item

    def delete(self, actor: UserProfile, item_id: int) -> None:
        permissions.require(actor.role, self.policy.delete_capability)
        item = self._load(item_id)
        old_values = snapshot(self.policy.out_schema, item)
        description = f"Deleted {self.policy.label.lower()}: {self._title(item)}"

        with transaction(self.db):
            self.db.delete(item)
            self.db.flush()
            self.audit.record(
                "DELETE", self.policy.table_name, item_id, actor, old_values=old_values, description=description
            )

        logger.info("%s %s deleted by %s", self.policy.label, item_id, actor.username)

"""Role to capability policy.

Every permission decision in the service reads from ``ROLE_CAPABILITIES``.
Unknown roles resolve to ``NO_CAPABILITIES`` so that a malformed role string
can never grant access.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields

from cvdesk.errors import AccessDeniedError, ForbiddenError


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CapabilitySet:
    can_access_user_profiles: bool = False
    can_create_users: bool = False
    can_edit_users: bool = False
    can_delete_users: bool = False
    can_view_all_cvs: bool = False
    can_edit_cvs: bool = False
    can_delete_cvs: bool = False
    can_manage_positions: bool = False
    can_manage_qualifications: bool = False
    can_delete_positions: bool = False
    can_delete_qualifications: bool = False
    can_manage_tenders: bool = False
    can_capture_records: bool = False

    def allows(self, capability: str) -> bool:
        if capability not in CAPABILITIES:
            return False
        return bool(getattr(self, capability))

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


CAPABILITIES: tuple[str, ...] = tuple(item.name for item in fields(CapabilitySet))

NO_CAPABILITIES = CapabilitySet()

_ADMIN = CapabilitySet(**{name: True for name in CAPABILITIES})

ROLE_CAPABILITIES: dict[str, CapabilitySet] = {
    "admin": _ADMIN,
    # Everything an admin can do except destroy.
    "super_user": CapabilitySet(
        can_access_user_profiles=True,
        can_create_users=True,
        can_edit_users=True,
        can_view_all_cvs=True,
        can_edit_cvs=True,
        can_manage_positions=True,
        can_manage_qualifications=True,
        can_manage_tenders=True,
        can_capture_records=True,
    ),
    "manager": CapabilitySet(
        can_view_all_cvs=True,
        can_manage_tenders=True,
    ),
    "user": CapabilitySet(
        can_capture_records=True,
    ),
}

VIEW_CAPABILITIES: dict[str, str] = {
    "landing": "can_view_all_cvs",
    "qualifications": "can_manage_qualifications",
    "positions-roles": "can_manage_positions",
    "tenders": "can_manage_tenders",
    "capture-record": "can_capture_records",
    "user-profiles": "can_access_user_profiles",
}

_VIEW_ALIASES: dict[str, str] = {
    "landing page": "landing",
    "cv database": "landing",
    "positions | roles": "positions-roles",
    "capture record": "capture-record",
    "access user profiles": "user-profiles",
}


def capabilities_for(role: str | None) -> CapabilitySet:
    return ROLE_CAPABILITIES.get(role or "", NO_CAPABILITIES)


def can(role: str | None, capability: str) -> bool:
    return capabilities_for(role).allows(capability)


def require(role: str | None, capability: str) -> None:
    if not can(role, capability):
        logger.warning("Denied %s to role %r", capability, role)
        raise ForbiddenError(capability)


def normalize_view(view: str) -> str:
    key = view.strip().lower()
    return _VIEW_ALIASES.get(key, key)


def can_access_view(role: str | None, view: str) -> bool:
    capability = VIEW_CAPABILITIES.get(normalize_view(view))
    if capability is None:
        return False
    return can(role, capability)


def require_view(role: str | None, view: str) -> None:
    if not can_access_view(role, view):
        logger.warning("Denied view %r to role %r", view, role)
        raise AccessDeniedError(view)


def view_access_for(role: str | None) -> dict[str, bool]:
    return {view: can(role, capability) for view, capability in VIEW_CAPABILITIES.items()}

from cvdesk.schemas.auth import AuthResponse, LoginRequest, PermissionsResponse, ViewAccessResponse
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
from cvdesk.schemas.cv_record import CVRecordCreate, CVRecordFilter, CVRecordOut, CVRecordUpdate
from cvdesk.schemas.user_profile import UserProfileCreate, UserProfileFilter, UserProfileOut, UserProfileUpdate
from cvdesk.schemas.version_history import VersionHistoryOut

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "PermissionsResponse",
    "ViewAccessResponse",
    "CVRecordCreate",
    "CVRecordUpdate",
    "CVRecordOut",
    "CVRecordFilter",
    "UserProfileCreate",
    "UserProfileUpdate",
    "UserProfileOut",
    "UserProfileFilter",
    "VersionHistoryOut",
    "QualificationCreate",
    "QualificationUpdate",
    "QualificationOut",
    "PositionRoleCreate",
    "PositionRoleUpdate",
    "PositionRoleOut",
    "TenderCreate",
    "TenderUpdate",
    "TenderOut",
]

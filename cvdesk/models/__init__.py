from cvdesk.models.auth_session import AuthSession
from cvdesk.models.cv_record import CVRecord
from cvdesk.models.position_role import PositionRole
from cvdesk.models.qualification import Qualification
from cvdesk.models.tender import Tender
from cvdesk.models.user import UserProfile
from cvdesk.models.version_history import VersionHistory

__all__ = ["AuthSession", "CVRecord", "PositionRole", "Qualification", "Tender", "UserProfile", "VersionHistory"]

import pytest

from cvdesk.errors import AccessDeniedError, ForbiddenError
from cvdesk.services import permissions
from cvdesk.services.permissions import CAPABILITIES, can, can_access_view, capabilities_for


EXPECTED = {
    "can_access_user_profiles": (True, True, False, False),
    "can_create_users": (True, True, False, False),
    "can_edit_users": (True, True, False, False),
    "can_delete_users": (True, False, False, False),
    "can_view_all_cvs": (True, True, True, False),
    "can_edit_cvs": (True, True, False, False),
    "can_delete_cvs": (True, False, False, False),
    "can_manage_positions": (True, True, False, False),
    "can_manage_qualifications": (True, True, False, False),
    "can_delete_positions": (True, False, False, False),
    "can_delete_qualifications": (True, False, False, False),
    "can_manage_tenders": (True, True, True, False),
    "can_capture_records": (True, True, False, True),
}
ROLES = ("admin", "super_user", "manager", "user")


def test_table_covers_every_capability():
    assert set(EXPECTED) == set(CAPABILITIES)


@pytest.mark.parametrize("capability", sorted(EXPECTED))
def test_role_capability_table(capability):
    for role, expected in zip(ROLES, EXPECTED[capability]):
        assert can(role, capability) is expected, (role, capability)


@pytest.mark.parametrize("role", ["guest", "", None, "Admin", "superuser"])
def test_unknown_role_has_no_capabilities(role):
    assert not any(capabilities_for(role).as_dict().values())
    assert all(not can(role, capability) for capability in CAPABILITIES)


def test_unknown_capability_is_denied():
    assert not can("admin", "can_launch_rockets")


def test_super_user_lacks_only_delete_capabilities():
    missing = {name for name, allowed in capabilities_for("super_user").as_dict().items() if not allowed}
    assert missing == {"can_delete_users", "can_delete_cvs", "can_delete_positions", "can_delete_qualifications"}


def test_require_raises_forbidden():
    permissions.require("admin", "can_delete_cvs")
    with pytest.raises(ForbiddenError) as excinfo:
        permissions.require("manager", "can_delete_cvs")
    assert excinfo.value.message == "Not permitted"


def test_view_access():
    assert can_access_view("manager", "landing")
    assert can_access_view("manager", "tenders")
    assert not can_access_view("manager", "user-profiles")
    assert can_access_view("user", "capture-record")
    assert not can_access_view("user", "landing")
    assert not can_access_view("admin", "no-such-view")


def test_view_aliases_match_display_names():
    assert can_access_view("admin", "Access User Profiles")
    assert can_access_view("super_user", "Positions | Roles")
    assert not can_access_view("user", "Landing page")


def test_require_view_raises_access_denied():
    with pytest.raises(AccessDeniedError) as excinfo:
        permissions.require_view("user", "user-profiles")
    assert excinfo.value.message == "Access Denied"

import logging
from dataclasses import replace

import pytest

from cvdesk.logging_config import configure_logging
from cvdesk.main import create_app


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_later_calls_still_change_the_level(restore_root_level):
    configure_logging("INFO")
    configure_logging("ERROR")
    assert logging.getLogger().level == logging.ERROR


def test_create_app_uses_settings_log_level(settings, restore_root_level):
    create_app(replace(settings, log_level="DEBUG"))
    assert logging.getLogger().level == logging.DEBUG

"""
Pytest configuration and fixtures for querydesk tests.
"""
import os
from unittest.mock import Mock

import pytest

from querydesk.config.user_preferences import UserPreferences
from querydesk.database.adapters import ConnectionAdapter, DriverResult, SQLiteAdapter
from querydesk.database.session import ConnectionSession

# Qt widgets are created without a display in CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Qt Application fixture for tests that need QWidget
_qt_app = None


@pytest.fixture(scope="session")
def qapp():
    """Create a QApplication for tests that need Qt widgets."""
    global _qt_app
    from PySide6.QtWidgets import QApplication
    if _qt_app is None:
        _qt_app = QApplication.instance() or QApplication([])
    yield _qt_app


@pytest.fixture
def preferences(tmp_path):
    """UserPreferences stored in a temporary _AppConfig directory."""
    return UserPreferences(config_dir=tmp_path / "_AppConfig")


@pytest.fixture
def mock_adapter():
    """Adapter mock returning an untagged result for every statement."""
    adapter = Mock(spec=ConnectionAdapter)
    adapter.query.return_value = DriverResult.unknown()
    return adapter


@pytest.fixture
def mock_session(mock_adapter):
    """Session over the mock adapter."""
    session = ConnectionSession(mock_adapter, connection_id="conn-1")
    yield session
    session.close()


@pytest.fixture
def sqlite_adapter():
    """SQLite adapter over an in-memory database."""
    adapter = SQLiteAdapter.connect(":memory:")
    yield adapter
    adapter.close()


@pytest.fixture
def sqlite_session():
    """Session over an in-memory SQLite database."""
    session = ConnectionSession(SQLiteAdapter.connect(":memory:"), connection_id="sqlite-1")
    yield session
    session.close()

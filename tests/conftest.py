# Minimal conftest providing a fallback 'qtbot' fixture if pytest-qt is not installed.
# Qt tests run headless; if pytest-qt is installed, its fixture wins.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from preftree.config.settings_service import SettingsService

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except Exception:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        app = QApplication.instance() or QApplication(sys.argv[:1])  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

        yield Bot()
        for w in widgets:
            w.deleteLater()
        app.processEvents()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test starts from default runtime settings."""
    previous = SettingsService.instance
    SettingsService.instance = SettingsService(
        breadcrumb_delimiter="#", default_category=None, debug_tree_checks=False
    )
    yield SettingsService.instance
    SettingsService.instance = previous

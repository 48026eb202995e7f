# Offscreen Qt for the overlay tests plus a fallback 'qtbot' fixture when
# pytest-qt is not installed. If pytest-qt is present its fixture wins.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:  # pragma: no cover
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

            def wait(self, ms):
                from PyQt6.QtTest import QTest

                QTest.qWait(ms)

        yield Bot()
        for w in widgets:
            w.close()
        app.processEvents()


@pytest.fixture(autouse=True)
def _reset_services():
    from fokus_tour.services.service_locator import services

    yield
    services.clear()

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")
pytest.importorskip("PySide6.QtSvgWidgets")

from gui.main_window import MainWindow  # noqa: E402


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


@pytest.fixture
def window(app):
    window = MainWindow()
    yield window
    window.close()


class TestMainWindow:
    def test_startup_renders_once(self, window):
        assert not window.render_timer.isActive()
        assert window.current_svg
        assert window.processor.get_printing_paths()

    def test_set_program_text_renders_immediately(self, window):
        window.set_program_text("ShutterOpen\nMSEG (X,Y),0,0\nLINE (X,Y),3,0\nENDS (X,Y)")
        assert not window.render_timer.isActive()
        assert 'd="M 0 0 L 3 0"' in window.current_svg

    def test_typing_starts_debounce(self, window):
        window.editor.appendPlainText("LINE (X,Y),1,1")
        assert window.render_timer.isActive()

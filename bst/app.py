import logging
import sys
from pathlib import Path

from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from bst.bst_ctrl import BSTController
from bst.bst_input import is_query_keystroke
from viz_core.global_ctrl import GlobalController
from viz_widgets.graphics_view import CustomGraphicsView


class MainWindow(QMainWindow):
    """Main application window with left (canvas + query) and right (output + history) panels."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("BST Prolog Visualizer")
        self.resize(1280, 760)

        self.global_ctrl = GlobalController()
        self.controller = BSTController(self.global_ctrl)

        self._build_ui()
        self._connect_signals()

        # Apply stylesheet if available
        style_path = Path(__file__).resolve().parent.parent / "resources" / "styles.qss"
        if style_path.exists():
            with open(style_path, "r", encoding="utf-8") as handle:
                self.setStyleSheet(handle.read())

        self.controller.on_activate(self.graphics_view)
        QApplication.instance().installEventFilter(self)

    def _build_ui(self):
        central = QWidget(self)
        self.setCentralWidget(central)

        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(8)

        # Left panel (70%)
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(6)

        self.graphics_view = CustomGraphicsView()
        left_layout.addWidget(self.graphics_view, 1)

        speed_layout = QHBoxLayout()
        speed_label = QLabel("Animation Speed")
        self.speed_value_label = QLabel("1.0×")
        self.speed_slider = QSlider(Qt.Horizontal)
        settings = self.global_ctrl.settings
        self.speed_slider.setRange(int(settings.min_speed * 100), int(settings.max_speed * 100))
        self.speed_slider.setValue(100)
        speed_layout.addWidget(speed_label)
        speed_layout.addWidget(self.speed_slider, 1)
        speed_layout.addWidget(self.speed_value_label)
        left_layout.addLayout(speed_layout)

        left_layout.addWidget(self.controller.build_panel(), 0)

        # Right panel (30%)
        root_layout.addWidget(left_panel, 14)
        root_layout.addWidget(self.controller.output_panel, 6)

    def _connect_signals(self):
        self.speed_slider.valueChanged.connect(self._on_speed_slider_changed)
        self.global_ctrl.speedChanged.connect(self._on_speed_changed)

    def _on_speed_slider_changed(self, value):
        self.global_ctrl.set_speed(value / 100.0)

    def _on_speed_changed(self, speed):
        self.speed_value_label.setText(f"{speed:.1f}×")

    def eventFilter(self, watched, event):
        # Typing a letter or digit anywhere in the window goes to the query input.
        if (
            event.type() == QEvent.KeyPress
            and isinstance(watched, QWidget)
            and watched.window() is self
        ):
            modifiers = event.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier)
            if is_query_keystroke(event.text(), bool(modifiers)):
                return self.controller.take_keystroke(event.text())
        return super().eventFilter(watched, event)

    def closeEvent(self, event):
        QApplication.instance().removeEventFilter(self)
        self.controller.on_deactivate()
        super().closeEvent(event)


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = MainWindow()
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()

"""
The main window for the PRG viewer application.
"""
import logging
from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                               QPushButton, QFileDialog, QMessageBox, QTextEdit,
                               QSplitter, QLabel, QComboBox, QDoubleSpinBox)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFont
from .editor import Editor
from .viewport import Viewport
from prg_processor import PRGProcessor
from config.render_config import ConfigManager, RenderConfig
from core.markup import PRINTING_COLOR, RAPID_COLOR

logger = logging.getLogger(__name__)

SAMPLE_PROGRAM = """#0
! **********************************
! PRG to SVG Example
! **********************************

ptp/ev (X,Y),1.00000,1.00000,gDblRapidSpeed
Start gIntSubBuffer,ShutterOpen;TILL PST(gIntSubBuffer).#RUN = 0
wait 2
MSEG (X,Y),1.00000,1.00000
line (X,Y),1.00000,5.00000
line (X,Y),5.00000,5.00000
line (X,Y),5.00000,1.00000
line (X,Y),1.00000,1.00000
ENDS (X,Y)
till (^X_AST.#MOVE) & (^Y_AST.#MOVE)
Start gIntSubBuffer,ShutterClose;TILL PST(gIntSubBuffer).#RUN = 0
wait 2

ptp/ev (X,Y),2.00000,2.00000,gDblRapidSpeed
Start gIntSubBuffer,ShutterOpen;TILL PST(gIntSubBuffer).#RUN = 0
wait 2
MSEG (X,Y),2.00000,2.00000
line (X,Y),2.00000,4.00000
arc2 (X,Y),4.00000,4.00000,-1.57080
line (X,Y),4.00000,2.00000
line (X,Y),2.00000,2.00000
ENDS (X,Y)
till (^X_AST.#MOVE) & (^Y_AST.#MOVE)
Start gIntSubBuffer,ShutterClose;TILL PST(gIntSubBuffer).#RUN = 0
wait 2

STOP
"""


class MainWindow(QMainWindow):
    def __init__(self, config: RenderConfig = None):
        super().__init__()
        self.setWindowTitle("PRG to SVG Viewer")
        self.setGeometry(100, 100, 1600, 1000)

        self.processor = PRGProcessor()
        self.current_config = config or ConfigManager.screen()
        self.current_svg = ""

        # Re-render shortly after typing stops
        self.render_timer = QTimer()
        self.render_timer.setSingleShot(True)
        self.render_timer.timeout.connect(self.render_program)

        self.setup_ui()
        self.connect_signals()

        self.set_program_text(SAMPLE_PROGRAM)

    def setup_ui(self):
        """Set up the user interface."""
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)

        # Top toolbar
        toolbar_layout = QHBoxLayout()

        self.load_button = QPushButton("Load PRG")
        self.save_button = QPushButton("Save PRG")
        self.render_button = QPushButton("Render")
        self.save_svg_button = QPushButton("Save SVG")
        self.reset_view_button = QPushButton("Reset View")
        self.fit_button = QPushButton("Fit")

        self.preset_selector = QComboBox()
        self.preset_selector.addItems(ConfigManager.preset_names())
        self.preset_selector.setCurrentText(self.current_config.name)

        self.thickness_spin = QDoubleSpinBox()
        self.thickness_spin.setDecimals(3)
        self.thickness_spin.setRange(0.001, 1.0)
        self.thickness_spin.setSingleStep(0.005)
        self.thickness_spin.setValue(self.current_config.line_thickness)

        self.status_label = QLabel("Ready")

        toolbar_layout.addWidget(self.load_button)
        toolbar_layout.addWidget(self.save_button)
        toolbar_layout.addWidget(self.render_button)
        toolbar_layout.addWidget(self.save_svg_button)
        toolbar_layout.addWidget(self.reset_view_button)
        toolbar_layout.addWidget(self.fit_button)
        toolbar_layout.addStretch()
        toolbar_layout.addWidget(QLabel("Preset:"))
        toolbar_layout.addWidget(self.preset_selector)
        toolbar_layout.addWidget(QLabel("Line Width:"))
        toolbar_layout.addWidget(self.thickness_spin)
        toolbar_layout.addWidget(self.status_label)

        main_layout.addLayout(toolbar_layout)

        main_splitter = QSplitter(Qt.Vertical)
        main_layout.addWidget(main_splitter)

        workspace_splitter = QSplitter(Qt.Horizontal)

        self.editor = Editor()
        workspace_splitter.addWidget(self.editor)

        self.viewport = Viewport()
        workspace_splitter.addWidget(self.viewport)

        # Information panel
        info_panel = QWidget()
        info_layout = QVBoxLayout(info_panel)
        info_layout.setContentsMargins(5, 5, 5, 5)

        legend = QLabel(
            f'<span style="color:{PRINTING_COLOR}">&#9644;</span> Printing (shutter open)<br>'
            f'<span style="color:{RAPID_COLOR}">&#9644;</span> Rapid move (shutter closed)'
        )
        info_layout.addWidget(legend)

        self.stats_label = QLabel("Statistics:\nNo program rendered")
        self.stats_label.setFont(QFont("Courier", 9))
        self.stats_label.setStyleSheet("QLabel { background-color: #f0f0f0; padding: 5px; }")
        info_layout.addWidget(self.stats_label)
        info_layout.addStretch()

        workspace_splitter.addWidget(info_panel)

        # Diagnostics console
        bottom_pane = QWidget()
        bottom_layout = QVBoxLayout(bottom_pane)
        bottom_layout.setContentsMargins(0, 0, 0, 0)
        bottom_layout.addWidget(QLabel("Skipped Lines and Warnings:"))

        self.error_console = QTextEdit()
        self.error_console.setReadOnly(True)
        self.error_console.setMaximumHeight(150)
        bottom_layout.addWidget(self.error_console)

        main_splitter.addWidget(workspace_splitter)
        main_splitter.addWidget(bottom_pane)

        workspace_splitter.setSizes([600, 700, 250])
        main_splitter.setSizes([800, 200])

    def connect_signals(self):
        """Connect all signal handlers."""
        self.load_button.clicked.connect(self.load_prg_file)
        self.save_button.clicked.connect(self.save_prg_file)
        self.render_button.clicked.connect(self.render_program)
        self.save_svg_button.clicked.connect(self.save_svg_file)
        self.reset_view_button.clicked.connect(self.viewport.reset_view)
        self.fit_button.clicked.connect(self.viewport.fit_to_window)
        self.preset_selector.currentTextChanged.connect(self.change_preset)
        self.thickness_spin.valueChanged.connect(self.change_line_thickness)
        self.editor.textChanged.connect(self.on_text_changed)

    def load_prg_file(self):
        """Load a PRG program from a file."""
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Open PRG File", "",
            "PRG Files (*.prg *.PRG *.txt);;All Files (*)"
        )

        if file_path:
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    content = f.read()
            except (OSError, UnicodeDecodeError) as e:
                QMessageBox.warning(self, "Load Failed", f"Could not read {file_path}:\n{e}")
                return
            self.set_program_text(content)
            logger.info("Loaded: %s", file_path)

    def set_program_text(self, text):
        """Replace the editor contents and render once, bypassing the debounce."""
        self.editor.setPlainText(text)
        self.render_timer.stop()
        self.render_program()

    def save_prg_file(self):
        """Save the current program to a file."""
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save PRG File", "program.prg",
            "PRG Files (*.prg);;All Files (*)"
        )

        if file_path:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.editor.toPlainText())
            logger.info("Saved: %s", file_path)

    def save_svg_file(self):
        """Save the last rendered SVG to a file."""
        if not self.current_svg:
            QMessageBox.information(self, "Nothing to Save", "Please render the PRG file first.")
            return

        file_path, _ = QFileDialog.getSaveFileName(
            self, "Save SVG File", "prg-output.svg",
            "SVG Files (*.svg);;All Files (*)"
        )

        if file_path:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.current_svg)
            logger.info("Saved SVG: %s", file_path)

    def change_preset(self, preset_name):
        self.current_config = ConfigManager.get_config(preset_name)
        self.thickness_spin.blockSignals(True)
        self.thickness_spin.setValue(self.current_config.line_thickness)
        self.thickness_spin.blockSignals(False)
        self.render_program()

    def change_line_thickness(self, value):
        self.current_config.line_thickness = value
        self.render_program()

    def render_program(self):
        """Process the current program and update all displays."""
        self.processor.process_program(self.editor.toPlainText())
        self.current_svg = self.processor.render_svg(self.current_config)
        self.viewport.set_svg(self.current_svg)

        self.update_error_display()
        self.update_statistics()

        warnings = len(self.processor.get_all_errors())
        self.status_label.setText(f"Rendered ({warnings} warnings)" if warnings else "Rendered")

    def update_error_display(self):
        """Update the diagnostics console and editor markers."""
        errors = self.processor.get_all_errors()

        if not errors:
            self.error_console.setText("No skipped lines.")
            self.editor.clear_warning_highlights()
            return

        self.error_console.setText("\n".join(
            f"Line {error.line_number}: [{error.error_type.value.upper()}] {error.message}"
            for error in errors
        ))
        self.editor.highlight_warning_lines([error.line_number for error in errors])

    def update_statistics(self):
        """Update the statistics display."""
        stats = self.processor.get_statistics()
        commands = stats['commands']
        geometry = stats['geometry']
        size = geometry['bounding_box']['size']

        stats_text = f"""Statistics:
Total Lines: {stats['processing']['total_lines']}
Commands: {stats['processing']['total_commands']}
Skipped: {stats['processing']['skipped_lines']}

Commands by Type:
PTP: {commands['PTP']}  LINE: {commands['LINE']}
ARC2: {commands['ARC2']}  MSEG: {commands['MSEG']}
ENDS: {commands['ENDS']}

Paths:
Printing: {geometry['printing_paths']}
Rapid: {geometry['rapid_paths']}
Printed Length: {geometry['printing_length']:.3f}
Extent: {size[0]:.3f} x {size[1]:.3f}"""

        self.stats_label.setText(stats_text)

    def on_text_changed(self):
        self.render_timer.stop()
        self.render_timer.start(500)

"""
UI setup and layout management for the main window.

This module provides UI setup functionality for the main window,
separating layout concerns from orchestration and event handling.
"""

from __future__ import annotations

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSizePolicy,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from gui.utils.styling import StyleSheets
from gui.widgets.log_console import LogConsole
from gui.widgets.status_indicator import StatusIndicatorWidget

NOT_SELECTED_TEXT = "NOT SELECTED"
CONVERT_BUTTON_TEXT = "EXECUTE CONVERSION"
CONVERTING_BUTTON_TEXT = "PROCESSING..."

_DEFAULT_SPLITTER_SIZES = [320, 280]


class MainWindowUI:
    """
    Handles UI setup and layout for the main window.

    The window is a column of cards (output folder, input file, convert)
    above the log console.
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """
        Initialize the UI manager.

        Args:
            main_window: The main window to set up
        """
        self.main_window = main_window
        self.central_widget: QWidget | None = None
        self.main_splitter: QSplitter | None = None

        self.select_folder_button: QPushButton | None = None
        self.folder_label: QLabel | None = None
        self.select_file_button: QPushButton | None = None
        self.file_label: QLabel | None = None

        self.status_indicator: StatusIndicatorWidget | None = None
        self.convert_button: QPushButton | None = None
        self.progress_bar: QProgressBar | None = None

        self.log_console: LogConsole | None = None

    def setup_ui(self) -> None:
        """Set up the complete user interface."""
        self.main_window.setWindowTitle("Parcel")
        self.main_window.setMinimumSize(640, 560)
        self.main_window.resize(760, 680)
        self.main_window.setStyleSheet(StyleSheets.get_window_style())

        self._setup_central_widget()
        self._setup_shortcuts()
        self._setup_accessibility()
        self._load_ui_settings()

    def _setup_central_widget(self) -> None:
        self.central_widget = QWidget()
        self.central_widget.setObjectName("centralWidget")
        self.main_window.setCentralWidget(self.central_widget)

        main_layout = QVBoxLayout(self.central_widget)
        main_layout.setContentsMargins(20, 20, 20, 20)
        main_layout.setSpacing(12)

        header = QLabel("PARCEL // PLACE FILE CONVERTER")
        header.setObjectName("cardTitle")
        main_layout.addWidget(header)

        self.main_splitter = QSplitter(Qt.Orientation.Vertical)
        self.main_splitter.setObjectName("mainSplitter")
        self.main_splitter.setChildrenCollapsible(False)

        cards_widget = QWidget()
        cards_layout = QVBoxLayout(cards_widget)
        cards_layout.setContentsMargins(0, 0, 0, 0)
        cards_layout.setSpacing(12)

        self.select_folder_button, self.folder_label = self._add_selection_card(
            cards_layout,
            title="01 // OUTPUT FOLDER",
            button_text="SELECT FOLDER",
            accessible_name="Select output folder",
            tooltip="Choose the folder the converted project is written to (Ctrl+Shift+O)",
        )
        self.select_file_button, self.file_label = self._add_selection_card(
            cards_layout,
            title="02 // INPUT FILE",
            button_text="SELECT FILE",
            accessible_name="Select input file",
            tooltip="Choose a .rbxl or .rbxlx place file (Ctrl+O)",
        )
        self.select_file_button.setEnabled(False)

        self._setup_convert_card(cards_layout)
        cards_layout.addStretch()

        self.main_splitter.addWidget(cards_widget)

        self.log_console = LogConsole()
        self.log_console.setMinimumHeight(160)
        self.log_console.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.main_splitter.addWidget(self.log_console)
        self.main_splitter.setStretchFactor(0, 0)
        self.main_splitter.setStretchFactor(1, 1)
        self.main_splitter.setSizes(_DEFAULT_SPLITTER_SIZES)

        main_layout.addWidget(self.main_splitter)

    def _add_selection_card(
        self, layout: QVBoxLayout, *, title: str, button_text: str, accessible_name: str, tooltip: str
    ) -> tuple[QPushButton, QLabel]:
        card = QFrame()
        card.setObjectName("card")
        card_layout = QHBoxLayout(card)
        card_layout.setContentsMargins(12, 10, 12, 10)

        text_layout = QVBoxLayout()
        title_label = QLabel(title)
        title_label.setObjectName("cardTitle")
        text_layout.addWidget(title_label)

        value_label = QLabel(NOT_SELECTED_TEXT)
        value_label.setObjectName("cardValue")
        value_label.setProperty("selected", False)
        value_label.setAccessibleName(f"{accessible_name} value")
        text_layout.addWidget(value_label)
        card_layout.addLayout(text_layout, 1)

        button = QPushButton(button_text)
        button.setStyleSheet(StyleSheets.get_button_style("secondary"))
        button.setAccessibleName(accessible_name)
        button.setToolTip(tooltip)
        card_layout.addWidget(button)

        layout.addWidget(card)
        return button, value_label

    def _setup_convert_card(self, layout: QVBoxLayout) -> None:
        card = QFrame()
        card.setObjectName("card")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(12, 10, 12, 10)
        card_layout.setSpacing(8)

        title_label = QLabel("03 // CONVERT")
        title_label.setObjectName("cardTitle")
        card_layout.addWidget(title_label)

        self.status_indicator = StatusIndicatorWidget()
        card_layout.addWidget(self.status_indicator)

        self.convert_button = QPushButton(CONVERT_BUTTON_TEXT)
        self.convert_button.setMinimumHeight(44)
        self.convert_button.setStyleSheet(StyleSheets.get_button_style("primary"))
        self.convert_button.setAccessibleName("Run conversion")
        self.convert_button.setAccessibleDescription("Convert the selected place file into the output folder")
        self.convert_button.setToolTip("Run the conversion (Ctrl+Return)")
        self.convert_button.setEnabled(False)
        card_layout.addWidget(self.convert_button)

        self.progress_bar = QProgressBar()
        self.progress_bar.setObjectName("progressBar")
        # Indeterminate: the converter reports no progress
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setVisible(False)
        self.progress_bar.setAccessibleName("Conversion in progress")
        card_layout.addWidget(self.progress_bar)

        layout.addWidget(card)

    def _setup_shortcuts(self) -> None:
        shortcuts = [
            ("Ctrl+Shift+O", self.select_folder_button),
            ("Ctrl+O", self.select_file_button),
            ("Ctrl+Return", self.convert_button),
        ]
        for sequence, button in shortcuts:
            action = QAction(self.main_window)
            action.setShortcut(QKeySequence(sequence))
            # animateClick respects the button's enabled state
            action.triggered.connect(button.animateClick)
            self.main_window.addAction(action)

    def _setup_accessibility(self) -> None:
        if not (self.select_folder_button and self.select_file_button and self.convert_button and self.log_console):
            return

        widgets = [self.select_folder_button, self.select_file_button, self.convert_button, self.log_console]
        for i in range(len(widgets) - 1):
            self.main_window.setTabOrder(widgets[i], widgets[i + 1])

        self.select_folder_button.setFocus()

    def _load_ui_settings(self) -> None:
        """Load UI settings from QSettings."""
        settings = QSettings()

        geometry = settings.value("ui/geometry")
        if geometry and isinstance(geometry, bytes | bytearray):
            self.main_window.restoreGeometry(geometry)

        sizes = settings.value("ui/splitterSizes")
        if self.main_splitter and isinstance(sizes, list) and len(sizes) == 2:
            self.main_splitter.setSizes([int(size) for size in sizes])

    def save_ui_settings(self) -> None:
        """Save UI settings to QSettings."""
        settings = QSettings()
        settings.setValue("ui/geometry", self.main_window.saveGeometry())
        if self.main_splitter:
            settings.setValue("ui/splitterSizes", self.main_splitter.sizes())

import logging
import os

from PyQt5.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QLabel, QPushButton, QFileDialog, QFrame, QAction,
                             QMessageBox, QPlainTextEdit)
from PyQt5.QtCore import Qt, pyqtSignal

from examtext.config_manager import ConfigManager
from examtext.error_messages import build_load_error_message
from examtext.exceptions import ProcessingError
from examtext.models import ExamDocument
from examtext.service import ExamService

from .preview_window import PreviewWindow, TYPE_NAMES
from .settings_window import SettingsWindow
from .styles import APP_STYLE, apply_shadow


logger = logging.getLogger(__name__)


class DropArea(QFrame):
    fileDropped = pyqtSignal(str)

    def __init__(self):
        super().__init__()
        self.setAcceptDrops(True)
        self.setFrameStyle(QFrame.StyledPanel | QFrame.Sunken)
        self.setObjectName("DropArea")

        layout = QVBoxLayout()
        self.label = QLabel("Drop an exam text file here\nor click to choose one")
        self.label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.label)
        self.setLayout(layout)

        self.setMinimumHeight(140)
        apply_shadow(self)

    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.accept()
            self.setStyleSheet("background-color: #e3f2fd; border: 2px dashed #2196f3;")
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        self.setStyleSheet("")

    def dropEvent(self, event):
        self.setStyleSheet("")
        files = [u.toLocalFile() for u in event.mimeData().urls()]
        if files:
            self.fileDropped.emit(files[0])

    def mousePressEvent(self, event):
        self.fileDropped.emit("SELECT_FILE")


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Exam Text Parser")
        self.resize(700, 620)

        self.config_manager = ConfigManager()
        self.service = ExamService(self.config_manager)
        self.current_document: ExamDocument | None = None

        self.initUI()
        self.applyStyle()

    def initUI(self):
        menu_bar = self.menuBar()
        settings_action = QAction("Settings", self)
        settings_action.triggered.connect(self.showSettings)
        help_action = QAction("Help", self)
        help_action.triggered.connect(self.showHelp)
        menu_bar.addAction(settings_action)
        menu_bar.addAction(help_action)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(30, 30, 30, 30)
        main_layout.setSpacing(16)

        title_label = QLabel("Exam Text Parser")
        title_label.setObjectName("MainTitle")
        main_layout.addWidget(title_label)

        subtitle_label = QLabel("Turns generated exam text into questions you can review and grade.")
        subtitle_label.setObjectName("SubTitle")
        main_layout.addWidget(subtitle_label)

        self.drop_area = DropArea()
        self.drop_area.fileDropped.connect(self.handleFileSelect)
        main_layout.addWidget(self.drop_area)

        self.paste_edit = QPlainTextEdit()
        self.paste_edit.setPlaceholderText("...or paste the exam text here")
        main_layout.addWidget(self.paste_edit)

        self.status_label = QLabel("Status: waiting for input")
        main_layout.addWidget(self.status_label)

        btn_layout = QHBoxLayout()
        self.parse_btn = QPushButton("Parse pasted text")
        self.parse_btn.setObjectName("PrimaryBtn")
        self.parse_btn.clicked.connect(self.parsePastedText)
        self.preview_btn = QPushButton("Preview")
        self.preview_btn.setEnabled(False)
        self.preview_btn.clicked.connect(self.showPreview)
        btn_layout.addWidget(self.parse_btn)
        btn_layout.addWidget(self.preview_btn)
        main_layout.addLayout(btn_layout)

    def handleFileSelect(self, file_path):
        if file_path == "SELECT_FILE":
            file_path, _ = QFileDialog.getOpenFileName(
                self,
                "Choose exam file",
                "",
                "Text Files (*.txt *.md);;All Files (*)",
            )

        if not file_path or not os.path.isfile(file_path):
            return

        try:
            document = self.service.parse_file(file_path)
        except ProcessingError as exc:
            logger.warning("Could not load %s: %s", file_path, exc)
            self.current_document = None
            self.preview_btn.setEnabled(False)
            self.status_label.setText("Status: load failed")
            QMessageBox.warning(self, "Load failed", build_load_error_message(str(exc)))
            return
        self.showDocument(document)

    def parsePastedText(self):
        self.showDocument(self.service.parse_text(self.paste_edit.toPlainText()))

    def showDocument(self, document: ExamDocument):
        self.current_document = document
        self.preview_btn.setEnabled(True)
        if not document.has_questions:
            self.status_label.setText("Status: no questions found, the preview shows the raw text")
            return

        counts = ", ".join(
            f"{TYPE_NAMES.get(question_type, question_type)} {count}"
            for question_type, count in document.count_by_type().items()
        )
        self.status_label.setText(f"Status: {document.total_count} questions ({counts})")

    def showPreview(self):
        if not self.current_document:
            QMessageBox.information(self, "Notice", "Load or paste an exam first.")
            return
        PreviewWindow(self.current_document, self.service, self).exec_()

    def showSettings(self):
        settings = SettingsWindow(self.config_manager, self)
        if settings.exec_():
            self.service.reload_config()
            if self.current_document is not None:
                self.showDocument(
                    self.service.parse_text(
                        self.current_document.raw_text, source=self.current_document.source
                    )
                )
            QMessageBox.information(self, "Settings saved", "Settings have been saved.")

    def showHelp(self):
        QMessageBox.information(
            self,
            "Help",
            "1) Choose a .txt/.md exam file or paste the exam text.\n"
            "2) Review the parsed questions in the preview.\n"
            "3) Enter answers and grade them against the answer key.\n\n"
            "Questions start with '1.' or '1)', options with 'A)' and the answer key "
            "follows an 'Answer Key' line.",
        )

    def applyStyle(self):
        self.setStyleSheet(APP_STYLE)

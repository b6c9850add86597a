from PyQt5.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QPushButton,
                             QFormLayout, QGroupBox, QDoubleSpinBox, QLineEdit)

from examtext.config_manager import ConfigManager
from examtext.detector import DEFAULT_ESSAY_KEYWORDS
from examtext.grader import DEFAULT_TYPE_WEIGHTS

from .preview_window import TYPE_NAMES


class SettingsWindow(QDialog):
    def __init__(self, config_manager: ConfigManager, parent=None):
        super().__init__(parent)
        self.config_manager = config_manager
        self.weight_spins: dict[str, QDoubleSpinBox] = {}
        self.setWindowTitle("Settings")
        self.resize(420, 360)
        self.initUI()
        self.loadConfig()

    def initUI(self):
        layout = QVBoxLayout(self)

        weight_group = QGroupBox("Question type weights")
        weight_form = QFormLayout()
        for question_type in DEFAULT_TYPE_WEIGHTS:
            spin = QDoubleSpinBox()
            spin.setRange(0.0, 20.0)
            spin.setSingleStep(0.5)
            spin.setSuffix(" x")
            self.weight_spins[question_type] = spin
            weight_form.addRow(f"{TYPE_NAMES.get(question_type, question_type)}:", spin)
        weight_group.setLayout(weight_form)
        layout.addWidget(weight_group)

        parse_group = QGroupBox("Parsing")
        parse_form = QFormLayout()
        self.essay_edit = QLineEdit()
        self.essay_edit.setPlaceholderText(", ".join(DEFAULT_ESSAY_KEYWORDS))
        parse_form.addRow("Essay keywords:", self.essay_edit)
        parse_group.setLayout(parse_form)
        layout.addWidget(parse_group)

        btn_layout = QHBoxLayout()
        self.save_btn = QPushButton("Save")
        self.save_btn.setObjectName("PrimaryBtn")
        self.cancel_btn = QPushButton("Cancel")
        btn_layout.addStretch()
        btn_layout.addWidget(self.save_btn)
        btn_layout.addWidget(self.cancel_btn)
        layout.addLayout(btn_layout)

        self.save_btn.clicked.connect(self.saveConfig)
        self.cancel_btn.clicked.connect(self.reject)

    def loadConfig(self):
        weights = self.config_manager.get("grading.weights", {}) or {}
        for question_type, spin in self.weight_spins.items():
            spin.setValue(float(weights.get(question_type, DEFAULT_TYPE_WEIGHTS[question_type])))
        keywords = self.config_manager.get("parsing.essay_keywords", DEFAULT_ESSAY_KEYWORDS)
        self.essay_edit.setText(", ".join(keywords))

    def saveConfig(self):
        keywords = [word.strip() for word in self.essay_edit.text().split(",") if word.strip()]
        self.config_manager.update(
            {
                "grading": {
                    "weights": {
                        question_type: spin.value()
                        for question_type, spin in self.weight_spins.items()
                    }
                },
                "parsing": {"essay_keywords": keywords or list(DEFAULT_ESSAY_KEYWORDS)},
            }
        )
        self.accept()

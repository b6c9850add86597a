from PyQt5.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QListWidget,
                             QListWidgetItem, QTextEdit, QLabel, QPushButton,
                             QSplitter, QFrame, QLineEdit, QMessageBox)
from PyQt5.QtCore import Qt

from examtext.models import ExamDocument
from examtext.service import ExamService


TYPE_NAMES = {
    "mcq": "Multiple choice",
    "trueFalse": "True/False",
    "shortAnswer": "Short answer",
    "essay": "Essay",
    "unknown": "Unknown",
}


class PreviewWindow(QDialog):
    def __init__(self, exam_document: ExamDocument, service: ExamService, parent=None):
        super().__init__(parent)
        self.exam_document = exam_document
        self.service = service
        self.current_index = -1
        self.answers: dict[int, str] = {}

        self.setWindowTitle("Parsed exam preview")
        self.resize(1000, 700)
        if self.exam_document.has_questions:
            self.initUI()
            self.bindEvents()
            self.loadQuestions()
        else:
            self.initRawTextUI()

    def initRawTextUI(self):
        layout = QVBoxLayout(self)

        notice = QLabel(self.exam_document.diagnostic)
        notice.setObjectName("NoticeLabel")
        notice.setWordWrap(True)
        layout.addWidget(notice)

        raw_view = QTextEdit()
        raw_view.setReadOnly(True)
        raw_view.setPlainText(self.exam_document.raw_text)
        layout.addWidget(raw_view)

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.reject)
        btn_layout = QHBoxLayout()
        btn_layout.addStretch()
        btn_layout.addWidget(close_btn)
        layout.addLayout(btn_layout)

    def initUI(self):
        main_layout = QVBoxLayout(self)

        header_label = QLabel("Select a question on the left to review it and enter an answer.")
        header_label.setStyleSheet("font-weight: bold; color: #333; margin-bottom: 10px;")
        main_layout.addWidget(header_label)

        splitter = QSplitter(Qt.Horizontal)

        self.list_widget = QListWidget()
        self.list_widget.setObjectName("QuestionList")
        splitter.addWidget(self.list_widget)

        detail_container = QFrame()
        detail_layout = QVBoxLayout(detail_container)

        self.meta_label = QLabel("")
        detail_layout.addWidget(self.meta_label)

        self.question_view = QTextEdit()
        self.question_view.setReadOnly(True)
        detail_layout.addWidget(self.question_view)

        detail_layout.addWidget(QLabel("Answer key:"))
        self.key_label = QLabel("")
        detail_layout.addWidget(self.key_label)

        detail_layout.addWidget(QLabel("Your answer:"))
        self.answer_edit = QLineEdit()
        detail_layout.addWidget(self.answer_edit)

        splitter.addWidget(detail_container)
        splitter.setStretchFactor(1, 1)
        main_layout.addWidget(splitter)

        btn_layout = QHBoxLayout()
        self.grade_btn = QPushButton("Grade answers")
        self.grade_btn.setObjectName("PrimaryBtn")
        self.close_btn = QPushButton("Close")
        btn_layout.addStretch()
        btn_layout.addWidget(self.grade_btn)
        btn_layout.addWidget(self.close_btn)
        main_layout.addLayout(btn_layout)

    def bindEvents(self):
        self.list_widget.currentRowChanged.connect(self.onQuestionSelected)
        self.grade_btn.clicked.connect(self.gradeAnswers)
        self.close_btn.clicked.connect(self.accept)

    def loadQuestions(self):
        self.list_widget.clear()
        for question in self.exam_document.questions:
            status = "✅" if question.correct_answer else "⚠️"
            preview_line = question.text.splitlines()[0] if question.text else "(no prompt)"
            item_text = f"{status} {question.id:02d}. {preview_line}"
            self.list_widget.addItem(QListWidgetItem(item_text))

        self.list_widget.setCurrentRow(0)

    def saveCurrentAnswer(self):
        index = self.current_index
        if index < 0 or index >= len(self.exam_document.questions):
            return
        question = self.exam_document.questions[index]
        value = self.answer_edit.text().strip()
        if value:
            self.answers[question.id] = value
        else:
            self.answers.pop(question.id, None)

    def onQuestionSelected(self, index: int):
        self.saveCurrentAnswer()
        self.current_index = index
        if index < 0 or index >= len(self.exam_document.questions):
            self.question_view.clear()
            self.answer_edit.clear()
            return

        question = self.exam_document.questions[index]
        meta = TYPE_NAMES.get(question.type, question.type)
        if question.section:
            meta = f"{question.section} · {meta}"
        self.meta_label.setText(meta)

        body_parts = [question.text]
        body_parts.extend(f"{label}) {option}" for label, option in question.labeled_options())
        self.question_view.setPlainText("\n".join(part for part in body_parts if part))
        self.key_label.setText(question.correct_answer or "(not found)")
        self.answer_edit.setText(self.answers.get(question.id, ""))

    def gradeAnswers(self):
        self.saveCurrentAnswer()
        report = self.service.grade(self.exam_document, self.answers)
        lines = [
            f"Score: {report.earned:g} / {report.possible:g} ({report.percentage}%)",
            f"Correct: {report.correct_count}  Incorrect: {report.incorrect_count}  "
            f"Unattempted: {report.unattempted_count}",
        ]
        for question_type, counts in report.by_type.items():
            lines.append(
                f"- {TYPE_NAMES.get(question_type, question_type)}: "
                f"{counts['correct']} correct, {counts['incorrect']} incorrect"
            )
        QMessageBox.information(self, "Grading result", "\n".join(lines))

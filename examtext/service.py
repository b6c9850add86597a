from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .config_manager import ConfigManager
from .detector import match_question_start
from .error_messages import build_parse_diagnostic_message
from .exceptions import ParseError, ProcessingError, UnsupportedFileError
from .grader import ExamGrader
from .models import ExamDocument, GradeReport
from .parser import QuestionParser


logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".md")


class ExamService:
    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        self.config_manager = config_manager or ConfigManager()
        self._refresh_dependencies()

    def _refresh_dependencies(self) -> None:
        config = self.config_manager.all()
        self.parser = QuestionParser(config)
        self.grader = ExamGrader(config)

    def reload_config(self) -> None:
        self.config_manager.reload()
        self._refresh_dependencies()

    def parse_text(self, raw_text: Any, source: str = "") -> ExamDocument:
        text = raw_text if isinstance(raw_text, str) else ""
        document = ExamDocument(raw_text=text, source=source)
        document.questions = self.parser.parse(raw_text)
        document.refresh_total_count()
        if not document.has_questions:
            document.diagnostic = self._build_parse_diagnostic_message(text.splitlines())
            if text.strip():
                logger.warning(
                    "Parsed zero questions from non-empty exam text (%s)", source or "pasted text"
                )
            else:
                logger.info("Exam text is empty (%s)", source or "pasted text")
        else:
            logger.info(
                "Parsed %d questions from %s: %s",
                document.total_count,
                source or "pasted text",
                document.count_by_type(),
            )
        return document

    def parse_file(self, file_path: str, strict: bool = False) -> ExamDocument:
        path = Path(file_path)
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileError(
                f"Only .txt and .md exam files are supported (got '{path.suffix or path.name}')."
            )
        try:
            raw_text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise ProcessingError(str(exc)) from exc

        document = self.parse_text(raw_text, source=path.name)
        if strict and not document.has_questions:
            raise ParseError(document.diagnostic)
        return document

    def grade(self, document: ExamDocument, answers: Mapping[Any, Optional[str]]) -> GradeReport:
        report = self.grader.grade(document.questions, answers)
        logger.info(
            "Graded %s: %s/%s (%d%%)",
            document.source or "exam",
            report.earned,
            report.possible,
            report.percentage,
        )
        return report

    def document_to_payload(
        self, document: ExamDocument, include_answers: bool = True
    ) -> dict[str, Any]:
        questions = document.questions if include_answers else document.display_questions()
        return {
            "source": document.source,
            "total_count": document.total_count,
            "diagnostic": document.diagnostic,
            "questions": [question.to_dict() for question in questions],
        }

    def _build_parse_diagnostic_message(self, lines: list[str]) -> str:
        non_empty = [line.strip() for line in lines if line and line.strip()]
        match_count = sum(
            1
            for line in non_empty[:20]
            if match_question_start(line, self.parser.question_regexes) is not None
        )
        return build_parse_diagnostic_message(non_empty, match_count)

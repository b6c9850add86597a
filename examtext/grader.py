from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional, Sequence

from .detector import DEFAULT_OPTION_LABELS, normalize_answer
from .models import GradeReport, ParsedQuestion, QuestionResult, option_label


logger = logging.getLogger(__name__)

DEFAULT_TYPE_WEIGHTS: dict[str, float] = {
    "mcq": 1,
    "trueFalse": 1,
    "shortAnswer": 2,
    "essay": 3,
    "unknown": 1,
}

RESULT_STATUSES = ("correct", "incorrect", "unattempted", "ungraded")

_TRUE_FALSE_ALIASES = {"t": "True", "true": "True", "f": "False", "false": "False"}


def _squash(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip().casefold()


class ExamGrader:
    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        config = config or {}
        self.weights: dict[str, float] = dict(DEFAULT_TYPE_WEIGHTS)
        for question_type, value in (config.get("grading", {}).get("weights") or {}).items():
            try:
                self.weights[question_type] = float(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric weight %r for %s", value, question_type)
        self.option_labels: list[str] = config.get("parsing", {}).get(
            "option_labels", DEFAULT_OPTION_LABELS
        )

    def weight_for(self, question_type: str) -> float:
        return self.weights.get(question_type, 1)

    def grade(
        self,
        questions: Sequence[ParsedQuestion],
        answers: Mapping[Any, Optional[str]],
    ) -> GradeReport:
        submitted_by_id = self._index_answers(answers)
        report = GradeReport(by_type={})

        for question in questions:
            weight = self.weight_for(question.type)
            submitted = (submitted_by_id.get(question.id) or "").strip()
            result = QuestionResult(
                question_id=question.id,
                type=question.type,
                status="unattempted",
                submitted=submitted or None,
                expected=question.correct_answer,
                weight=weight,
            )
            if not question.correct_answer:
                result.status = "ungraded" if submitted else "unattempted"
            else:
                report.possible += weight
                if submitted:
                    if self._is_match(question, submitted):
                        result.status = "correct"
                        result.earned = weight
                        report.earned += weight
                    else:
                        result.status = "incorrect"

            counts = report.by_type.setdefault(
                question.type, {status: 0 for status in RESULT_STATUSES}
            )
            counts[result.status] += 1
            report.results.append(result)

        report.percentage = round(100 * report.earned / report.possible) if report.possible else 0
        return report

    def _index_answers(self, answers: Mapping[Any, Optional[str]]) -> dict[int, str]:
        indexed: dict[int, str] = {}
        for key, value in (answers or {}).items():
            try:
                question_id = int(str(key).strip())
            except ValueError:
                logger.debug("Skipping answer with non-numeric question id %r", key)
                continue
            if value is not None:
                indexed[question_id] = str(value)
        return indexed

    def _is_match(self, question: ParsedQuestion, submitted: str) -> bool:
        expected = question.correct_answer or ""
        if question.type == "mcq":
            return self._mcq_choice(question, submitted) == self._mcq_choice(question, expected)
        if question.type == "trueFalse":
            given = _TRUE_FALSE_ALIASES.get(_squash(submitted).rstrip("."), submitted)
            wanted = _TRUE_FALSE_ALIASES.get(_squash(expected).rstrip("."), expected)
            return _squash(given) == _squash(wanted)
        return _squash(submitted) == _squash(expected)

    def _mcq_choice(self, question: ParsedQuestion, value: str) -> str:
        """Reduce an MCQ answer to its option letter when it names one."""
        normalized = normalize_answer(value, self.option_labels) or ""
        labels = [option_label(index) for index in range(len(question.options))]
        if normalized in labels:
            return normalized
        for label, option in question.labeled_options():
            if _squash(option) == _squash(value):
                return label
        return _squash(value)

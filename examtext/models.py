from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional


QUESTION_TYPES = ("mcq", "trueFalse", "shortAnswer", "essay", "unknown")


def option_label(index: int) -> str:
    return chr(ord("A") + index)


@dataclass(frozen=True)
class ParsedQuestion:
    id: int
    text: str
    type: str = "unknown"
    options: tuple[str, ...] = ()
    correct_answer: Optional[str] = None
    section: Optional[str] = None

    def labeled_options(self) -> list[tuple[str, str]]:
        return [(option_label(index), option) for index, option in enumerate(self.options)]

    def without_answer(self) -> "ParsedQuestion":
        """Copy for display; the answer-bearing original stays usable for grading."""
        return replace(self, correct_answer=None)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "text": self.text, "type": self.type}
        if self.type == "mcq":
            payload["options"] = list(self.options)
        if self.correct_answer is not None:
            payload["correctAnswer"] = self.correct_answer
        if self.section:
            payload["section"] = self.section
        return payload


@dataclass
class ExamDocument:
    raw_text: str
    questions: list[ParsedQuestion] = field(default_factory=list)
    source: str = ""
    diagnostic: str = ""
    total_count: int = 0

    def refresh_total_count(self) -> None:
        self.total_count = len(self.questions)

    @property
    def has_questions(self) -> bool:
        return bool(self.questions)

    def display_questions(self) -> list[ParsedQuestion]:
        return [question.without_answer() for question in self.questions]

    def count_by_type(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for question in self.questions:
            counts[question.type] = counts.get(question.type, 0) + 1
        return counts


@dataclass
class QuestionResult:
    question_id: int
    type: str
    status: str
    submitted: Optional[str] = None
    expected: Optional[str] = None
    weight: float = 1
    earned: float = 0


@dataclass
class GradeReport:
    results: list[QuestionResult] = field(default_factory=list)
    earned: float = 0
    possible: float = 0
    percentage: int = 0
    by_type: dict[str, dict[str, int]] = field(default_factory=dict)

    def _count(self, status: str) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def correct_count(self) -> int:
        return self._count("correct")

    @property
    def incorrect_count(self) -> int:
        return self._count("incorrect")

    @property
    def unattempted_count(self) -> int:
        return self._count("unattempted")

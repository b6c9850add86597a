"""Parsing and grading of free-text exams."""

from .grader import ExamGrader
from .models import ExamDocument, GradeReport, ParsedQuestion
from .parser import QuestionParser, parse_questions
from .service import ExamService

__all__ = [
    "ExamDocument",
    "ExamGrader",
    "ExamService",
    "GradeReport",
    "ParsedQuestion",
    "QuestionParser",
    "parse_questions",
]

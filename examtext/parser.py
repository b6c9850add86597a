from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .detector import (
    DEFAULT_ANSWER_KEY_MARKERS,
    DEFAULT_ESSAY_KEYWORDS,
    DEFAULT_OPTION_LABELS,
    DEFAULT_QUESTION_PATTERNS,
    DEFAULT_TRUE_FALSE_MARKERS,
    build_option_pattern,
    build_type_rules,
    classify_question_type,
    compile_patterns,
    extract_answer_key_entry,
    extract_inline_answer,
    is_answer_key_header,
    is_section_header,
    match_option,
    match_question_start,
    normalize_answer,
    split_inline_options,
)
from .models import ParsedQuestion


logger = logging.getLogger(__name__)


@dataclass
class _QuestionDraft:
    number: int
    text_parts: list[str]
    section: Optional[str] = None
    options: list[str] = field(default_factory=list)


@dataclass
class _ParseState:
    drafts: list[_QuestionDraft] = field(default_factory=list)
    current: Optional[_QuestionDraft] = None
    section: Optional[str] = None
    answer_mode: bool = False
    answer_key: dict[int, str] = field(default_factory=dict)

    def close_current(self) -> None:
        if self.current is not None:
            self.drafts.append(self.current)
            self.current = None


LineRule = tuple[
    Callable[[_ParseState, str], Any],
    Callable[[_ParseState, str, Any], None],
]


class QuestionParser:
    """Turns free-form exam text into :class:`ParsedQuestion` records.

    Each line goes through ``_line_rules`` in order; the first predicate that
    returns something truthy hands that value to its action. Lines no rule
    claims are dropped.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        parsing = (config or {}).get("parsing", {})
        self.question_patterns: list[str] = parsing.get(
            "question_patterns", DEFAULT_QUESTION_PATTERNS
        )
        self.option_labels: list[str] = parsing.get("option_labels", DEFAULT_OPTION_LABELS)
        self.answer_key_markers: list[str] = parsing.get(
            "answer_key_markers", DEFAULT_ANSWER_KEY_MARKERS
        )
        self.true_false_markers: list[str] = parsing.get(
            "true_false_markers", DEFAULT_TRUE_FALSE_MARKERS
        )
        self.essay_keywords: list[str] = parsing.get("essay_keywords", DEFAULT_ESSAY_KEYWORDS)

        self.question_regexes = compile_patterns(self.question_patterns) or compile_patterns(
            DEFAULT_QUESTION_PATTERNS
        )
        self._option_re = build_option_pattern(self.option_labels)
        self._type_rules = build_type_rules(self.true_false_markers, self.essay_keywords)
        self._line_rules: list[LineRule] = [
            (self._is_blank, self._skip),
            (self._is_answer_key_header, self._enter_answer_mode),
            (self._is_answer_mode, self._collect_answer),
            (self._match_section, self._set_section),
            (self._match_question, self._open_question),
            (self._match_option, self._add_option),
            (self._has_open_question, self._append_text),
        ]

    def parse(self, raw_text: Any) -> list[ParsedQuestion]:
        if not isinstance(raw_text, str):
            logger.warning(
                "Question parser received %s instead of text; returning no questions",
                type(raw_text).__name__,
            )
            return []
        if not raw_text.strip():
            logger.debug("Question parser received empty input")
            return []

        try:
            questions = self._parse_lines(raw_text.splitlines())
        except Exception:
            logger.exception("Question parser failed; returning no questions")
            return []

        if not questions:
            line_count = sum(1 for line in raw_text.splitlines() if line.strip())
            logger.warning(
                "No numbered questions found in %d non-empty lines; upstream text "
                "does not follow the expected exam format",
                line_count,
            )
        return questions

    def _parse_lines(self, lines: list[str]) -> list[ParsedQuestion]:
        state = _ParseState()
        for line in lines:
            for predicate, action in self._line_rules:
                hit = predicate(state, line)
                if hit:
                    action(state, line, hit)
                    break
        state.close_current()

        questions: list[ParsedQuestion] = []
        last_id = 0
        for position, draft in enumerate(state.drafts):
            question = self._build_question(draft, position, state.answer_key, last_id)
            questions.append(question)
            last_id = question.id
        return questions

    # ── line predicates ─────────────────────────────────────────

    @staticmethod
    def _is_blank(state: _ParseState, line: str) -> bool:
        return not line.strip()

    def _is_answer_key_header(self, state: _ParseState, line: str) -> bool:
        if not is_answer_key_header(line, self.answer_key_markers):
            return False
        # a numbered question that merely mentions an answer key is still a question
        return state.answer_mode or match_question_start(line, self.question_regexes) is None

    @staticmethod
    def _is_answer_mode(state: _ParseState, line: str) -> bool:
        return state.answer_mode

    @staticmethod
    def _match_section(state: _ParseState, line: str) -> Optional[str]:
        return is_section_header(line)

    def _match_question(self, state: _ParseState, line: str) -> Optional[tuple[int, str]]:
        return match_question_start(line, self.question_regexes)

    def _match_option(self, state: _ParseState, line: str) -> Optional[tuple[str, str]]:
        if state.current is None:
            return None
        return match_option(line, self._option_re)

    @staticmethod
    def _has_open_question(state: _ParseState, line: str) -> bool:
        return state.current is not None

    # ── line actions ────────────────────────────────────────────

    @staticmethod
    def _skip(state: _ParseState, line: str, hit: Any) -> None:
        return None

    @staticmethod
    def _enter_answer_mode(state: _ParseState, line: str, hit: Any) -> None:
        state.close_current()
        state.answer_mode = True

    def _collect_answer(self, state: _ParseState, line: str, hit: Any) -> None:
        entry = extract_answer_key_entry(line)
        if entry is None:
            return
        index, value = entry
        answer = normalize_answer(value, self.option_labels)
        if answer:
            state.answer_key[index] = answer

    @staticmethod
    def _set_section(state: _ParseState, line: str, title: str) -> None:
        state.section = title

    @staticmethod
    def _open_question(state: _ParseState, line: str, hit: tuple[int, str]) -> None:
        state.close_current()
        number, text = hit
        state.current = _QuestionDraft(number=number, text_parts=[text], section=state.section)

    @staticmethod
    def _add_option(state: _ParseState, line: str, hit: tuple[str, str]) -> None:
        state.current.options.append(hit[1])

    @staticmethod
    def _append_text(state: _ParseState, line: str, hit: Any) -> None:
        state.current.text_parts.append(line.strip())

    # ── finalisation ────────────────────────────────────────────

    def _build_question(
        self,
        draft: _QuestionDraft,
        position: int,
        answer_key: dict[int, str],
        last_id: int,
    ) -> ParsedQuestion:
        text = " ".join(part for part in draft.text_parts if part).strip()
        text, inline_answer = extract_inline_answer(text)

        options = list(draft.options)
        if options and inline_answer is None:
            last_option, inline_answer = extract_inline_answer(options[-1])
            if inline_answer is not None:
                options[-1] = last_option
                options = [option for option in options if option]
        if not options:
            text, options = split_inline_options(text, self.option_labels)

        question_type = classify_question_type(text, options, self._type_rules)
        if question_type != "mcq":
            options = []

        answer = answer_key.get(position) or normalize_answer(inline_answer, self.option_labels)
        number = draft.number if draft.number > last_id else last_id + 1
        return ParsedQuestion(
            id=number,
            text=text,
            type=question_type,
            options=tuple(options),
            correct_answer=answer,
            section=draft.section,
        )


def parse_questions(raw_text: Any, config: Optional[dict[str, Any]] = None) -> list[ParsedQuestion]:
    return QuestionParser(config).parse(raw_text)

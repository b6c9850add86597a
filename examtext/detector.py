from __future__ import annotations

import re
from typing import Callable, Optional, Sequence


DEFAULT_QUESTION_PATTERNS = [
    r"^\s*(\d+)[.)]\s*(.+)",
]

DEFAULT_OPTION_LABELS = ["A", "B", "C", "D"]

DEFAULT_ANSWER_KEY_MARKERS = [
    "correct answers",
    "answer key",
]

DEFAULT_TRUE_FALSE_MARKERS = [
    "true or false",
    "true/false",
]

DEFAULT_ESSAY_KEYWORDS = [
    "essay",
    "explain",
    "discuss",
    "elaborate",
    "describe",
]

SECTION_HEADER_RE = re.compile(r"^\s*\*\*([^*]+)\*\*\s*$")
ANSWER_KEY_ENTRY_RE = re.compile(
    r"^\s*(?:q(?:uestion)?\s*)?(\d+)(?:\s*[.:)\-]\s*|\s+)(.+?)\s*$", re.IGNORECASE
)
INLINE_ANSWER_RE = re.compile(
    r"(?:\bcorrect\s+)?(?<!\byour\s)\banswer\s*:\s*(.*?)(?:\s+explanation\s*:.*)?$",
    re.IGNORECASE,
)
TRUE_FALSE_ANSWER_RE = re.compile(r"^\(?\s*(true|false)\b", re.IGNORECASE)
BLANK_ANSWER_RE = re.compile(r"^[_.\s]*$")
EMPHASIS_RE = re.compile(r"[*`]+")

TypeRule = tuple[str, Callable[[str, Sequence[str]], bool]]


def compile_patterns(patterns: list[str]) -> list[re.Pattern[str]]:
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error:
            continue
    return compiled


def _label_class(labels: Sequence[str]) -> str:
    return "".join(re.escape(label) for label in labels)


def build_option_pattern(labels: Optional[Sequence[str]] = None) -> re.Pattern[str]:
    return re.compile(rf"^\s*([{_label_class(labels or DEFAULT_OPTION_LABELS)}])[.)]\s*(.+)")


def match_question_start(
    line: str,
    patterns: Optional[list[re.Pattern[str]]] = None,
) -> Optional[tuple[int, str]]:
    for pattern in patterns or compile_patterns(DEFAULT_QUESTION_PATTERNS):
        match = pattern.match(line)
        if not match or len(match.groups()) < 2:
            continue
        number_text, body = match.group(1), match.group(2) or ""
        if not number_text or not number_text.isdigit():
            continue
        if body[:1].isdigit() and line[match.start(2) - 1:match.start(2)] in {".", ")"}:
            # e.g. "1.5 kg of flour" is prose, not question 1
            continue
        number = int(number_text)
        if number <= 0:
            continue
        body = body.strip()
        if body:
            return number, body
    return None


def match_option(line: str, pattern: Optional[re.Pattern[str]] = None) -> Optional[tuple[str, str]]:
    match = (pattern or build_option_pattern()).match(line)
    if not match:
        return None
    text = match.group(2).strip()
    if not text:
        return None
    return match.group(1), text


def is_section_header(line: str) -> Optional[str]:
    match = SECTION_HEADER_RE.match(line)
    if not match:
        return None
    title = match.group(1).strip().rstrip(":").strip()
    return title or None


def is_answer_key_header(line: str, markers: Optional[list[str]] = None) -> bool:
    lower = line.lower()
    return any(marker.lower() in lower for marker in markers or DEFAULT_ANSWER_KEY_MARKERS)


def extract_answer_key_entry(line: str) -> Optional[tuple[int, str]]:
    """Return ``(0-based index, raw answer)`` for a line like ``"3. B"``."""
    match = ANSWER_KEY_ENTRY_RE.match(line)
    if not match:
        return None
    number = int(match.group(1))
    if number <= 0:
        return None
    value = match.group(2).strip()
    value = re.sub(r"^answer\s*:\s*", "", value, flags=re.IGNORECASE)
    if not value:
        return None
    return number - 1, value


def extract_inline_answer(text: str) -> tuple[str, Optional[str]]:
    """Split ``"... Answer: X"`` into the prompt without the annotation and ``X``."""
    match = INLINE_ANSWER_RE.search(text)
    if not match:
        return text, None
    value = match.group(1).strip()
    if value and BLANK_ANSWER_RE.match(value.rstrip(")")):
        # "Answer: ______" is a blank for the student to fill in
        return text, None
    prompt = text[:match.start()].rstrip()
    if prompt.endswith("(") and value.endswith(")"):
        prompt = prompt[:-1].rstrip()
        value = value[:-1].strip()
    prompt = prompt.rstrip(" -|").rstrip()
    return prompt, value or None


def split_inline_options(
    text: str,
    labels: Optional[Sequence[str]] = None,
) -> tuple[str, list[str]]:
    """Split ``"Q? A) x B) y"`` into ``("Q?", ["x", "y"])``.

    Labels must appear in order, each preceded by whitespace, and at least two
    of them must be present; otherwise the text is returned untouched.
    """
    markers: list[re.Match[str]] = []
    start = 0
    for label in labels or DEFAULT_OPTION_LABELS:
        match = re.compile(rf"(?<!\S){re.escape(label)}[.)]\s+").search(text, start)
        if not match:
            break
        markers.append(match)
        start = match.end()

    if len(markers) < 2:
        return text, []

    options: list[str] = []
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
        option = text[marker.end():end].strip()
        if not option:
            return text, []
        options.append(option)
    return text[:markers[0].start()].strip(), options


def normalize_answer(value: Optional[str], labels: Optional[Sequence[str]] = None) -> Optional[str]:
    raw = EMPHASIS_RE.sub("", value or "").strip()
    if not raw:
        return None

    tf_match = TRUE_FALSE_ANSWER_RE.match(raw)
    if tf_match:
        return tf_match.group(1).capitalize()

    label_class = _label_class(labels or DEFAULT_OPTION_LABELS)
    # "B", "B)", "B. Paris", "B - Paris", "B (Paris)", "B, Paris"
    letter_match = re.match(rf"^\(?([{label_class}])(?:\)|[.:,]|\s*[-–(]|$)", raw)
    if letter_match:
        return letter_match.group(1)
    lone_letter = re.match(rf"^\(?([{label_class.lower()}])\)?\.?$", raw)
    if lone_letter:
        return lone_letter.group(1).upper()
    return raw


def build_type_rules(
    true_false_markers: Optional[list[str]] = None,
    essay_keywords: Optional[list[str]] = None,
) -> list[TypeRule]:
    tf_markers = [marker.lower() for marker in true_false_markers or DEFAULT_TRUE_FALSE_MARKERS]
    essay_words = [word.lower() for word in essay_keywords or DEFAULT_ESSAY_KEYWORDS]
    return [
        ("mcq", lambda text, options: bool(options)),
        ("trueFalse", lambda text, options: any(marker in text.lower() for marker in tf_markers)),
        ("essay", lambda text, options: any(word in text.lower() for word in essay_words)),
        ("shortAnswer", lambda text, options: True),
    ]


def classify_question_type(
    text: str,
    options: Sequence[str],
    rules: Optional[list[TypeRule]] = None,
) -> str:
    for question_type, predicate in build_type_rules() if rules is None else rules:
        if predicate(text, options):
            return question_type
    return "unknown"

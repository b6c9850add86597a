from __future__ import annotations

from typing import Iterable, Sequence


def _join_lines(lines: Iterable[str]) -> str:
    return "\n".join(line for line in lines if line.strip())


def _trim_raw_error(text: str, limit: int = 700) -> str:
    raw = (text or "").strip()
    if len(raw) <= limit:
        return raw
    return raw[:limit].rstrip() + " ..."


def build_parse_diagnostic_message(lines: Sequence[str], match_count: int) -> str:
    non_empty = [line.strip() for line in lines if line and line.strip()]
    if not non_empty:
        return _join_lines(
            [
                "The exam text is empty.",
                "Generate the exam again or paste the questions manually.",
            ]
        )

    probe_count = min(len(non_empty), 20)
    sample = non_empty[:5]
    sample_text = "\n".join(f"- {line[:80]}" for line in sample)
    return (
        "Could not find any numbered questions; showing the raw content instead.\n"
        f"Pattern check: {match_count} of the first {probe_count} lines look like question numbers\n\n"
        "First lines of the text:\n"
        f"{sample_text}\n\n"
        "Things to check:\n"
        "- Each question should start on its own line as '1.' or '1)'.\n"
        "- Options should start with 'A)' or 'A.' and an answer key should follow the questions."
    )


def build_load_error_message(raw_message: str) -> str:
    raw = (raw_message or "").strip()
    lower = raw.lower()

    tips: list[str]
    if "only .txt" in lower or "unsupported" in lower:
        return raw
    if "could not find any numbered questions" in lower or "exam text is empty" in lower:
        return raw
    if "no such file" in lower or "not found" in lower:
        tips = [
            "The selected file no longer exists.",
            "Pick the file again and retry.",
        ]
    elif "permission" in lower:
        tips = [
            "The file could not be opened because access was denied.",
            "Check the file permissions and retry.",
        ]
    elif "decode" in lower or "codec" in lower:
        tips = [
            "The file is not valid UTF-8 text.",
            "Save the exam as UTF-8 plain text and retry.",
        ]
    else:
        tips = [
            "The exam file could not be loaded.",
        ]

    return _join_lines(
        [
            *tips,
            "",
            "[Original error]",
            _trim_raw_error(raw) or "(none)",
        ]
    )

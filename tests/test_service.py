import tempfile
import unittest
from pathlib import Path

from examtext.config_manager import ConfigManager
from examtext.exceptions import ParseError, ProcessingError, UnsupportedFileError
from examtext.service import ExamService


SCENARIO = "\n".join(
    [
        "1. Capital of France? A) Berlin B) Paris C) Rome",
        "2. True or False: Water boils at 100C. Answer: True",
        "3. Explain the water cycle.",
        "Answer Key",
        "1. B",
    ]
)


class ServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = ExamService(ConfigManager())
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_parse_text_counts_questions(self) -> None:
        document = self.service.parse_text(SCENARIO, source="scenario")
        self.assertEqual(document.total_count, 3)
        self.assertEqual(document.count_by_type(), {"mcq": 1, "trueFalse": 1, "essay": 1})
        self.assertEqual(document.diagnostic, "")

    def test_empty_text_gets_empty_input_diagnostic(self) -> None:
        document = self.service.parse_text("")
        self.assertFalse(document.has_questions)
        self.assertIn("empty", document.diagnostic)

    def test_non_string_input_is_treated_as_empty(self) -> None:
        document = self.service.parse_text(None)
        self.assertEqual(document.raw_text, "")
        self.assertEqual(document.questions, [])

    def test_build_parse_diagnostic_message_contains_samples_and_count(self) -> None:
        lines = [
            "Introduction",
            "Which statement is correct?",
            "A) option",
            "B) option",
            "Conclusion",
        ]
        with self.assertLogs("examtext.service", level="WARNING"):
            document = self.service.parse_text("\n".join(lines))
        self.assertIn("Could not find any numbered questions", document.diagnostic)
        self.assertIn("0 of the first 5 lines", document.diagnostic)
        self.assertIn("First lines of the text", document.diagnostic)
        self.assertIn("- Introduction", document.diagnostic)

    def test_parse_file_reads_utf8_with_bom(self) -> None:
        path = self.tmp_dir / "exam.txt"
        path.write_text(SCENARIO, encoding="utf-8-sig")
        document = self.service.parse_file(str(path))
        self.assertEqual(document.source, "exam.txt")
        self.assertEqual(document.questions[0].id, 1)
        self.assertEqual(document.questions[0].text, "Capital of France?")

    def test_parse_file_rejects_unsupported_extension(self) -> None:
        path = self.tmp_dir / "exam.pdf"
        path.write_bytes(b"%PDF-1.4")
        with self.assertRaises(UnsupportedFileError):
            self.service.parse_file(str(path))

    def test_parse_file_missing_file(self) -> None:
        with self.assertRaises(ProcessingError):
            self.service.parse_file(str(self.tmp_dir / "missing.txt"))

    def test_parse_file_strict_raises_when_nothing_parsed(self) -> None:
        path = self.tmp_dir / "prose.md"
        path.write_text("No exam today.", encoding="utf-8")
        with self.assertRaises(ParseError) as ctx:
            self.service.parse_file(str(path), strict=True)
        self.assertIn("Could not find any numbered questions", str(ctx.exception))

    def test_document_payload_can_hide_answers(self) -> None:
        document = self.service.parse_text(SCENARIO)
        with_answers = self.service.document_to_payload(document)
        hidden = self.service.document_to_payload(document, include_answers=False)

        self.assertEqual(with_answers["questions"][0]["correctAnswer"], "B")
        self.assertEqual(with_answers["questions"][0]["options"], ["Berlin", "Paris", "Rome"])
        self.assertTrue(all("correctAnswer" not in q for q in hidden["questions"]))
        self.assertEqual(document.questions[0].correct_answer, "B")

    def test_grade_uses_parsed_answer_key(self) -> None:
        document = self.service.parse_text(SCENARIO)
        report = self.service.grade(document, {1: "B", 2: "False"})
        self.assertEqual(report.correct_count, 1)
        self.assertEqual(report.incorrect_count, 1)
        self.assertEqual(report.percentage, 50)


if __name__ == "__main__":
    unittest.main()

import unittest

from examtext.error_messages import build_load_error_message, build_parse_diagnostic_message


class ErrorMessageTestCase(unittest.TestCase):
    def test_missing_file_message(self) -> None:
        message = build_load_error_message("[Errno 2] No such file or directory: 'exam.txt'")
        self.assertIn("no longer exists", message)
        self.assertIn("[Original error]", message)

    def test_decode_message(self) -> None:
        message = build_load_error_message("'utf-8' codec can't decode byte 0xff")
        self.assertIn("UTF-8", message)
        self.assertIn("Original error", message)

    def test_default_message_trims_long_errors(self) -> None:
        message = build_load_error_message("x" * 1000)
        self.assertIn("could not be loaded", message)
        self.assertTrue(message.endswith(" ..."))

    def test_unsupported_file_message_is_preserved(self) -> None:
        raw = "Only .txt and .md exam files are supported (got '.pdf')."
        self.assertEqual(build_load_error_message(raw), raw)

    def test_diagnostic_message_is_preserved(self) -> None:
        raw = build_parse_diagnostic_message(["hello"], 0)
        self.assertEqual(build_load_error_message(raw), raw)

    def test_empty_input_diagnostic(self) -> None:
        message = build_parse_diagnostic_message(["", "   "], 0)
        self.assertIn("empty", message)
        self.assertNotIn("Pattern check", message)


if __name__ == "__main__":
    unittest.main()

import unittest

from examtext.detector import (
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


class DetectorTestCase(unittest.TestCase):
    def test_match_question_start(self) -> None:
        self.assertEqual(match_question_start("1. What is DNA?"), (1, "What is DNA?"))
        self.assertEqual(match_question_start("  12) Define osmosis"), (12, "Define osmosis"))
        self.assertIsNone(match_question_start("1.5 litres of water"))
        self.assertIsNone(match_question_start("0. Zero is not an id"))
        self.assertIsNone(match_question_start("A) option"))
        self.assertIsNone(match_question_start("3."))

    def test_match_option(self) -> None:
        self.assertEqual(match_option("A) Berlin"), ("A", "Berlin"))
        self.assertEqual(match_option("  C. Rome"), ("C", "Rome"))
        self.assertIsNone(match_option("E) out of range"))
        self.assertIsNone(match_option("Answer: B"))

    def test_is_section_header(self) -> None:
        self.assertEqual(is_section_header("**Section A**"), "Section A")
        self.assertEqual(is_section_header("  **Part 2: Essays:**  "), "Part 2: Essays")
        self.assertIsNone(is_section_header("**bold** then text"))
        self.assertIsNone(is_section_header("Section A"))

    def test_is_answer_key_header(self) -> None:
        self.assertTrue(is_answer_key_header("Answer Key"))
        self.assertTrue(is_answer_key_header("**Correct Answers:**"))
        self.assertFalse(is_answer_key_header("Answer: B"))
        self.assertTrue(is_answer_key_header("Solutions", markers=["solutions"]))
        self.assertTrue(is_answer_key_header("ANSWER KEY", markers=["Answer Key"]))

    def test_extract_answer_key_entry(self) -> None:
        self.assertEqual(extract_answer_key_entry("1. B"), (0, "B"))
        self.assertEqual(extract_answer_key_entry("10: True"), (9, "True"))
        self.assertEqual(extract_answer_key_entry("Q3 - C"), (2, "C"))
        self.assertEqual(extract_answer_key_entry("4. Answer: Lima"), (3, "Lima"))
        self.assertIsNone(extract_answer_key_entry("12"))
        self.assertIsNone(extract_answer_key_entry("Good luck!"))

    def test_extract_inline_answer(self) -> None:
        self.assertEqual(
            extract_inline_answer("Is ice cold? True or False? Answer: True"),
            ("Is ice cold? True or False?", "True"),
        )
        self.assertEqual(
            extract_inline_answer("Pick one. Correct answer: B Explanation: because"),
            ("Pick one.", "B"),
        )
        self.assertEqual(extract_inline_answer("No annotation here"), ("No annotation here", None))

    def test_fill_in_blank_is_not_an_answer(self) -> None:
        prompt = "Fill in: the ____ is red. Your answer: ______"
        self.assertEqual(extract_inline_answer(prompt), (prompt, None))
        blank = "The ____ is red. Answer: ____"
        self.assertEqual(extract_inline_answer(blank), (blank, None))

    def test_split_inline_options(self) -> None:
        self.assertEqual(
            split_inline_options("Capital? A) Berlin B) Paris C) Rome"),
            ("Capital?", ["Berlin", "Paris", "Rome"]),
        )
        self.assertEqual(split_inline_options("Vitamin A) is needed"), ("Vitamin A) is needed", []))
        self.assertEqual(split_inline_options("Plain prompt"), ("Plain prompt", []))

    def test_normalize_answer(self) -> None:
        self.assertEqual(normalize_answer("b"), "B")
        self.assertEqual(normalize_answer("(C)"), "C")
        self.assertEqual(normalize_answer("B. Paris"), "B")
        self.assertEqual(normalize_answer("B - Paris is the capital"), "B")
        self.assertEqual(normalize_answer("**B**"), "B")
        self.assertEqual(normalize_answer("B (Paris)"), "B")
        self.assertEqual(normalize_answer("C, Rome"), "C")
        self.assertEqual(normalize_answer("**True**"), "True")
        self.assertEqual(normalize_answer("true"), "True")
        self.assertEqual(normalize_answer("FALSE."), "False")
        self.assertEqual(normalize_answer("A prime number"), "A prime number")
        self.assertEqual(normalize_answer("E", labels=["A", "B", "C", "D", "E"]), "E")
        self.assertIsNone(normalize_answer("   "))
        self.assertIsNone(normalize_answer(None))

    def test_classify_question_type_priority(self) -> None:
        self.assertEqual(classify_question_type("True or false: explain", ["x"]), "mcq")
        self.assertEqual(classify_question_type("True/False: explain why", []), "trueFalse")
        self.assertEqual(classify_question_type("Elaborate on gravity", []), "essay")
        self.assertEqual(classify_question_type("Name a noble gas", []), "shortAnswer")

    def test_classify_question_type_without_rules_is_unknown(self) -> None:
        self.assertEqual(classify_question_type("Anything", [], rules=[]), "unknown")

    def test_build_type_rules_uses_custom_keywords(self) -> None:
        rules = build_type_rules(essay_keywords=["analyse"])
        self.assertEqual(classify_question_type("Analyse the poem", [], rules), "essay")
        self.assertEqual(classify_question_type("Explain the poem", [], rules), "shortAnswer")

    def test_compile_patterns_skips_invalid(self) -> None:
        compiled = compile_patterns([r"^(\d+)\.\s*(.+)", r"([unclosed"])
        self.assertEqual(len(compiled), 1)


if __name__ == "__main__":
    unittest.main()

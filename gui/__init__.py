"""PyQt5 windows for previewing and grading parsed exams."""

import json
import logging
import sys


def _run_dump_if_requested(argv: list[str]) -> int | None:
    if len(argv) != 3 or argv[1] != "--dump":
        return None

    from examtext.error_messages import build_load_error_message
    from examtext.exceptions import ProcessingError
    from examtext.service import ExamService

    service = ExamService()
    try:
        document = service.parse_file(argv[2])
    except ProcessingError as exc:
        print(build_load_error_message(str(exc)), file=sys.stderr)
        return 1
    print(json.dumps(service.document_to_payload(document), ensure_ascii=False, indent=2))
    return 0 if document.has_questions else 2


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    maybe_code = _run_dump_if_requested(sys.argv)
    if maybe_code is not None:
        sys.exit(maybe_code)

    from PyQt5.QtWidgets import QApplication
    from gui.main_window import MainWindow

    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())

if __name__ == "__main__":
    main()

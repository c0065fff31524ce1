import argparse
import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from history_window import HistoryWindow
from settings import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"


def main(argv=None):
    parser = argparse.ArgumentParser(description="Interactive commit history visualizer")
    parser.add_argument("--scenario", help="JSON file with the initial commits and view settings")
    args, qt_args = parser.parse_known_args(argv)

    if args.scenario:
        settings.load_settings(args.scenario)

    app = QApplication([sys.argv[0], *qt_args])

    window = HistoryWindow(settings)
    window.show()
    window.activateWindow()
    window.raise_()

    sys.exit(app.exec())


def configure_logging():
    # 根据环境变量设置日志级别
    log_level = logging.DEBUG if os.getenv("DEBUG") == "1" else logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    if os.getenv("LOG_TO_FILE") == "1":
        file_handler = logging.FileHandler("history.log")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)


def run():
    configure_logging()
    main()


if __name__ == "__main__":
    run()

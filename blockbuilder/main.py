import argparse
import logging
import sys

from PyQt6 import QtWidgets

from .core.settings import SettingsManager
from .ui.main_window import MainWindow


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockbuilder", description="Drag-and-drop page builder")
    parser.add_argument("site", nargs="?", help="Site file to open")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    return parser.parse_args(argv)


def main() -> int:
    args = parse_args(sys.argv[1:])
    settings = SettingsManager()
    level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = QtWidgets.QApplication(sys.argv[:1])
    win = MainWindow(settings)
    if args.site:
        win.open_path(args.site)
    win.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

"""
circuitlab GUI entry point.

Usage::

    python main.py
    python main.py circuit.json
    python main.py --debug
"""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from GUI.main_window import MainWindow

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="circuitlab", description="Interactive lumped circuit simulator")
    parser.add_argument("circuit", nargs="?", help="Circuit JSON file to open on startup")
    parser.add_argument("--debug", action="store_true", help="Log solver detail")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    window = MainWindow()
    if args.circuit:
        try:
            window.file_ctrl.load_circuit(args.circuit)
            window.setWindowTitle(window.file_ctrl.get_window_title())
        except (OSError, ValueError) as e:
            logger.error("Could not open %s: %s", args.circuit, e)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())

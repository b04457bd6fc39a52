# main.py
# -*- coding: utf-8 -*-
import sys
import logging
import argparse

import config
import settings_manager
from library_service import LibraryService, entries_to_json
from emulator_utils.emulator_manager import EmulatorKind

SCAN_CHOICES = ["yuzu", "ryujinx", "all"]


def configure_logging(level_name="INFO"):
    """Root logger with a console handler. Returns the shared formatter."""
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    log_format = '%(asctime)s - %(levelname)s - %(message)s'
    log_datefmt = '%H:%M:%S'
    log_formatter = logging.Formatter(log_format, log_datefmt)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # Console goes to stderr so headless JSON on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)
    return log_formatter


def run_headless_scan(service, target, directory=None) -> int:
    """Scans, prints the catalog as JSON on stdout and returns the exit code.

    With a directory, only that folder is scanned and target names the
    emulator its games are tagged with.
    """
    if directory:
        success, payload = service.scan_directory(directory, target)
    elif target == "all":
        success, payload = service.scan_all()
    else:
        success, payload = service.scan(target)
    if not success:
        logging.error(f"Scan failed: {payload}")
        return 1
    print(entries_to_json(payload))
    return 0


def run_gui(service, log_formatter) -> int:
    # Imported here so headless mode works without a display
    from PySide6.QtWidgets import QApplication
    from gui_utils import QtLogHandler
    from library_window import LibraryWindow

    qt_log_handler = QtLogHandler()
    qt_log_handler.setFormatter(log_formatter)
    qt_log_handler.setLevel(logging.INFO)
    logging.getLogger().addHandler(qt_log_handler)

    app = QApplication.instance() or QApplication(sys.argv)
    QApplication.setApplicationName(config.APP_NAME)
    QApplication.setApplicationVersion(config.APP_VERSION)

    window = LibraryWindow(service, qt_log_handler)
    window.show()
    logging.info("GUI started.")
    return app.exec()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=f'{config.APP_NAME}: Switch emulator game library.')
    parser.add_argument("--scan", choices=SCAN_CHOICES,
                        help="Scan without the GUI and print the catalog as JSON.")
    parser.add_argument("--scan-dir", metavar="DIRECTORY",
                        help="Scan a single folder without the GUI and print the catalog as JSON.")
    parser.add_argument("--emulator", choices=[kind.value for kind in EmulatorKind], default=EmulatorKind.YUZU.value,
                        help="Emulator used for games found with --scan-dir (default: yuzu).")
    parser.add_argument("--log-level", help="Override the log level from settings (DEBUG, INFO, ...).")
    args = parser.parse_args(argv)

    settings, first_launch = settings_manager.load_settings()
    log_formatter = configure_logging(args.log_level or settings.get("log_level", "INFO"))
    logging.info("Logging configured.")

    if first_launch:
        # Write the defaults so the user has a settings file to edit
        logging.info("First launch detected, saving default settings.")
        if not settings_manager.save_settings(settings):
            logging.warning("Unable to save default settings.")

    service = LibraryService(settings=settings)

    if args.scan_dir:
        logging.info(f"Detected argument --scan-dir '{args.scan_dir}'. Running headless scan...")
        return run_headless_scan(service, args.emulator, directory=args.scan_dir)
    if args.scan:
        logging.info(f"Detected argument --scan '{args.scan}'. Running headless scan...")
        return run_headless_scan(service, args.scan)

    return run_gui(service, log_formatter)


if __name__ == "__main__":
    sys.exit(main())

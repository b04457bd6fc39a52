# -*- coding: utf-8 -*-
import html
import logging

from PySide6.QtCore import QThread, Signal, QObject

LOG_LINE_COLORS = {
    logging.CRITICAL: "#FF0000",
    logging.ERROR: "#FF0000",
    logging.WARNING: "orange",
}


class WorkerThread(QThread):
    """Runs one LibraryService call off the GUI thread.

    The call returns a (success, payload) tuple which is forwarded as is.
    """
    finished = Signal(bool, object)

    def __init__(self, function, *args):
        super().__init__()
        self.function = function
        self.args = args

    def run(self):
        try:
            success, payload = self.function(*self.args)
        except Exception as e:
            # A crash in the core must still re-enable the window
            logging.critical(f"Library call {self.function.__name__} crashed: {e}", exc_info=True)
            success, payload = False, str(e)
        self.finished.emit(success, payload)


class QtLogHandler(logging.Handler, QObject):
    """Forwards log lines to the window's log dock as HTML."""
    log_signal = Signal(str)

    def __init__(self, parent=None):
        logging.Handler.__init__(self)
        QObject.__init__(self, parent)

    def emit(self, record):
        try:
            line = html.escape(self.format(record))
            color = LOG_LINE_COLORS.get(record.levelno)
            if color:
                line = f'<font color="{color}">{line}</font>'
            self.log_signal.emit(line)
        except Exception:
            self.handleError(record)

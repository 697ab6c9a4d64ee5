"""
Centralized logging configuration for the launcher replacer.

Call setup_logging() once at startup (launcher.py).  Individual modules
obtain their own loggers via logging.getLogger(__name__).

The progress report goes to stdout through pa_replacer.ui.report; the
console log handler writes to stderr and stays at WARNING unless verbose
output is requested.
"""
import json
import logging
import logging.handlers
import os
import sys
import time
import traceback

from .common import config_dir

_configured = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Structured JSON log formatter for machine parsing.

    Each log record becomes a single JSON line::

        {"ts":"2025-01-15T12:00:00Z","level":"INFO","logger":"pa_replacer.core.swap","msg":"..."}
    """

    def format(self, record):
        entry = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level=logging.INFO, log_file=None, console_level=logging.WARNING,
                  structured=False):
    """Configure project-wide logging.  Safe to call multiple times.

    Args:
        level: Root logger level (default INFO).
        log_file: Optional path to a rotating log file.
        console_level: Level of the stderr handler (default WARNING).
        structured: Use JSON structured logging format (default False).
    """
    global _configured
    if _configured:
        return

    if structured:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Open the log file first: an unwritable path raises OSError before
    # the root logger is touched, leaving logging unconfigured.
    file_handler = None
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=1_000_000, backupCount=3,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(min(level, console_level))
    root.addHandler(console)
    if file_handler is not None:
        root.addHandler(file_handler)
    _configured = True


def default_log_dir():
    """Return ``~/.config/pa-replacer/logs``, creating it if needed.

    Respects ``SUDO_USER`` so logs land in the real user's home even
    under sudo.
    """
    log_dir = os.path.join(config_dir(), "logs")
    os.makedirs(log_dir, exist_ok=True)
    return log_dir


def install_crash_handler():
    """Install a last-resort sys.excepthook that writes to a crash log.

    The crash log directory is only created when a crash happens; if it
    cannot be created the crash is still reported on stderr.
    """

    def handler(exc_type, exc_value, exc_tb):
        try:
            crash_log = os.path.join(default_log_dir(), "crash.log")
            with open(crash_log, "a") as f:
                f.write(f"\n--- {time.strftime('%Y-%m-%d %H:%M:%S')} ---\n")
                traceback.print_exception(exc_type, exc_value, exc_tb, file=f)
        except OSError:
            pass
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = handler

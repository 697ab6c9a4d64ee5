"""
Utility modules for the launcher replacer.

Provides logging setup, shared paths and process inspection.
"""

from .log import setup_logging, default_log_dir, install_crash_handler
from .common import APP_NAME, DEFAULT_REPLACEMENT, get_real_user_home
from .process import find_running

__all__ = [
    "setup_logging",
    "default_log_dir",
    "install_crash_handler",
    "APP_NAME",
    "DEFAULT_REPLACEMENT",
    "get_real_user_home",
    "find_running",
]

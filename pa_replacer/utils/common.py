"""
Shared paths and constants.
"""
import os

APP_NAME = "pa-replacer"

# Looked up relative to the current working directory when no path is given.
DEFAULT_REPLACEMENT = "UniversalLauncher.exe"


def get_real_user_home():
    """Return the real user's home directory, even under sudo.

    When running with ``sudo``, ``os.path.expanduser("~")`` returns
    ``/root`` instead of the invoking user's home.  This checks the
    ``SUDO_USER`` environment variable and resolves the correct path.
    """
    sudo_user = os.environ.get("SUDO_USER")
    if sudo_user:
        try:
            import pwd
            return pwd.getpwnam(sudo_user).pw_dir
        except (KeyError, ImportError):
            pass
    return os.path.expanduser("~")


def config_dir():
    """``~/.config/pa-replacer`` for the real user (not created)."""
    return os.path.join(get_real_user_home(), ".config", APP_NAME)

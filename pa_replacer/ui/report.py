"""
Human-readable progress report written to stdout.
"""
import sys
from pathlib import Path
from typing import Sequence

from .widgets import C, paint, rule

TITLE = "PortableApps Universal Launcher Replacer"
RESTORE_TITLE = "PortableApps Launcher Restorer"

LAUNCHER_PATTERN = "*/PortableApps/*Portable/*Portable.exe"
BACKUP_PATTERN = "*/PortableApps/*Portable/*Portable_original.exe"


class Reporter:
    """Formats progress lines for one run."""

    def __init__(self, stream=None, color=True):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color

    def line(self, text=""):
        print(text, file=self.stream)

    def _c(self, text, color):
        return paint(text, color, self.color)

    def banner(self, title=TITLE):
        self.line(self._c(title, C.CYN))
        self.line(self._c(rule(title), C.CYN))

    def setting(self, label, value):
        self.line(f"{label}: {value}")

    def error(self, message):
        self.line(self._c(f"Error: {message}", C.RED))

    def none_found(self, what="PortableApps", pattern=LAUNCHER_PATTERN):
        self.line(f"No {what} found in the specified directory.")
        self.line(f"Looking for pattern: {pattern}")

    def found(self, paths: Sequence[Path], what="PortableApps"):
        self.line(f"Found {len(paths)} {what}:")
        for i, path in enumerate(paths, 1):
            self.line(f"  {i}. {path.name}")
        self.line()

    def success(self, name, label="Success"):
        self.line(self._c(f"✅ {label}: {name}", C.GRN))

    def failure(self, name, cause):
        self.line(self._c(f"❌ Failed: {name} - {cause}", C.RED))

    def summary(self, ok, total, verb="patched"):
        self.line()
        self.line(self._c(f"Summary: {ok} of {total} apps successfully {verb}", C.BOLD))

    def celebrate(self, message):
        self.line()
        self.line(self._c(message, C.YLW))

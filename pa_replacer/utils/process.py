"""
Detect launchers that are currently running.

Windows refuses to rename an executable image that is in use; on other
platforms the rename succeeds but the running app keeps the old binary.
Either way a running launcher is skipped rather than swapped.
"""
import logging
import os
from pathlib import Path
from typing import Iterable, Set

import psutil

log = logging.getLogger(__name__)


def _norm(path) -> str:
    return os.path.normcase(os.path.abspath(str(path)))


def running_executables() -> Set[str]:
    """Return normalised executable paths of all visible processes."""
    exes = set()
    # process_iter fills in None for attributes it is denied access to
    for proc in psutil.process_iter(["exe"]):
        exe = proc.info.get("exe")
        if exe:
            exes.add(_norm(exe))
    return exes


def find_running(paths: Iterable[Path]) -> Set[Path]:
    """Return the subset of *paths* that some live process was started from."""
    paths = list(paths)
    if not paths:
        return set()
    try:
        live = running_executables()
    except psutil.Error as e:
        log.warning("Could not enumerate processes: %s", e)
        return set()
    return {p for p in paths if _norm(p) in live}

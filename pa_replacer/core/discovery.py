"""
Directory walk that finds PortableApps launchers.

The walk is depth-first, visits entries of each directory in sorted name
order and never descends into directory symlinks, so a given filesystem
state always yields the same sequence.  Only ``stat`` and directory
listings are performed.
"""
import enum
import logging
import os
from pathlib import Path
from typing import Callable, Iterator, List

from .layout import PathLike, has_portable_layout, is_backup_name, is_launcher_name, is_patched

log = logging.getLogger(__name__)


class WalkPolicy(enum.Enum):
    """What to do when an entry cannot be read during the walk."""
    CONTINUE = "continue"
    FAIL_FAST = "fail_fast"


class DiscoveryError(Exception):
    """Raised under ``WalkPolicy.FAIL_FAST`` for the first unreadable entry."""

    def __init__(self, path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"cannot read {path}: {cause}")


def _check_root(root: PathLike) -> Path:
    root = Path(root).absolute()
    if not root.exists():
        raise FileNotFoundError(f"Directory '{root}' does not exist")
    if not root.is_dir():
        raise NotADirectoryError(f"'{root}' is not a directory")
    return root


def _walk_files(root: Path, on_error: WalkPolicy) -> Iterator[Path]:
    """Yield every regular file under *root* in deterministic order."""

    def handle(path, exc):
        if on_error is WalkPolicy.FAIL_FAST:
            raise DiscoveryError(path, exc) from exc
        log.debug("Skipping unreadable entry %s: %s", path, exc)

    def visit(directory: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            handle(directory, e)
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                handle(entry.path, e)
                continue
            if is_dir:
                yield from visit(Path(entry.path))
            elif is_file:
                yield Path(entry.path)

    yield from visit(root)


def _collect(root: PathLike, on_error: WalkPolicy,
             match: Callable[[Path], bool]) -> List[Path]:
    found = []
    for path in _walk_files(_check_root(root), on_error):
        if match(path):
            log.debug("Found: %s", path)
            found.append(path)
    return found


def _is_unpatched_launcher(path: Path) -> bool:
    return (
        is_launcher_name(path.name)
        and has_portable_layout(path.parent)
        and not is_patched(path)
    )


def _is_backup_launcher(path: Path) -> bool:
    return is_backup_name(path.name) and has_portable_layout(path.parent)


def find_launchers(root: PathLike, on_error: WalkPolicy = WalkPolicy.CONTINUE) -> List[Path]:
    """Return unpatched PortableApps launchers under *root*.

    A file qualifies when its name matches ``*Portable.exe``
    (case-insensitive), an ``App/AppInfo`` directory sits beside it and
    its ``*_original.exe`` backup does not exist yet.

    Args:
        root: Directory to scan. Must exist.
        on_error: ``CONTINUE`` skips unreadable entries, ``FAIL_FAST``
                  raises :class:`DiscoveryError` on the first one.

    Returns:
        Absolute paths in walk order (possibly empty).

    Raises:
        FileNotFoundError / NotADirectoryError: *root* is unusable.
    """
    return _collect(root, on_error, _is_unpatched_launcher)


def find_patched_launchers(root: PathLike, on_error: WalkPolicy = WalkPolicy.CONTINUE) -> List[Path]:
    """Return ``*Portable_original.exe`` backups that sit in a PortableApps layout."""
    return _collect(root, on_error, _is_backup_launcher)

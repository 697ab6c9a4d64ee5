"""
PortableApps layout conventions.

A genuine PortableApps package looks like::

    FooPortable/
        FooPortable.exe          <- launcher
        App/AppInfo/             <- structural fingerprint

Once patched, the original launcher lives next to the universal one as
``FooPortable_original.exe``.  The backup's existence is the only marker
that an app has been processed.
"""
import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]

LAUNCHER_SUFFIX = "portable.exe"
BACKUP_MARKER = "_original"
BACKUP_SUFFIX = "portable" + BACKUP_MARKER + ".exe"
APPINFO_PARTS = ("App", "AppInfo")


def is_launcher_name(name: str) -> bool:
    """True if *name* matches ``*Portable.exe`` (case-insensitive)."""
    return name.lower().endswith(LAUNCHER_SUFFIX)


def is_backup_name(name: str) -> bool:
    """True if *name* matches ``*Portable_original.exe`` (case-insensitive)."""
    return name.lower().endswith(BACKUP_SUFFIX)


def backup_path(launcher: PathLike) -> Path:
    """Return the backup path for *launcher*.

    ``FooPortable.exe`` -> ``FooPortable_original.exe``, same directory.
    The extension keeps its original case.
    """
    launcher = Path(launcher)
    return launcher.with_name(launcher.stem + BACKUP_MARKER + launcher.suffix)


def is_patched(launcher: PathLike) -> bool:
    """True if anything (even a dangling link) occupies the backup path."""
    return os.path.lexists(backup_path(launcher))


def launcher_path_for_backup(backup: PathLike) -> Optional[Path]:
    """Inverse of :func:`backup_path`, or None if *backup* is not a backup name."""
    backup = Path(backup)
    stem = backup.stem
    if not stem.lower().endswith(BACKUP_MARKER):
        return None
    base = stem[:-len(BACKUP_MARKER)]
    if not base:
        return None
    return backup.with_name(base + backup.suffix)


def appinfo_dir(app_dir: PathLike) -> Path:
    return Path(app_dir).joinpath(*APPINFO_PARTS)


def has_portable_layout(app_dir: PathLike) -> bool:
    """True if ``App/AppInfo`` exists as a directory inside *app_dir*."""
    return appinfo_dir(app_dir).is_dir()

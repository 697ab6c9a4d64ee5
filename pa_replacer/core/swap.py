"""
Swap a PortableApps launcher for the universal launcher.

The transaction per launcher is::

    guard    backup already exists?           -> ALREADY_PATCHED
    preserve rename launcher -> backup        -> RENAME_FAILED on error
    install  copy replacement bytes + mode    -> PATCHED
    rollback rename backup -> launcher        -> ROLLED_BACK / STUCK

The returned :class:`SwapResult` says exactly which state the filesystem
was left in, so callers never need to inspect the directory themselves.
"""
import enum
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .layout import PathLike, backup_path, is_patched

log = logging.getLogger(__name__)


class SwapStatus(enum.Enum):
    PATCHED = "patched"
    UPDATED = "updated"
    ALREADY_PATCHED = "already_patched"
    NOT_PATCHED = "not_patched"
    RENAME_FAILED = "rename_failed"
    INSTALL_FAILED = "install_failed"
    ROLLED_BACK = "rolled_back"
    STUCK = "stuck"


_SUCCESS = (SwapStatus.PATCHED, SwapStatus.UPDATED)


@dataclass(frozen=True)
class SwapResult:
    """Outcome of one swap or refresh."""

    status: SwapStatus
    launcher: Path
    backup: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in _SUCCESS

    @property
    def needs_attention(self) -> bool:
        """True when the live launcher is missing and only the backup remains."""
        return self.status is SwapStatus.STUCK


def install_copy(replacement: PathLike, target: PathLike) -> None:
    """Write *replacement*'s bytes to *target* and copy its permission bits."""
    with open(replacement, "rb") as src, open(target, "wb") as dst:
        shutil.copyfileobj(src, dst)
    shutil.copymode(replacement, target)


def _discard(path) -> None:
    """Remove a partially written file, if any."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log.warning("Could not remove %s: %s", path, e)


def swap_launcher(launcher: PathLike, replacement: PathLike) -> SwapResult:
    """Replace *launcher* with *replacement*, keeping the original as a backup.

    The backup path is re-derived here rather than trusted from discovery,
    so a second call on the same launcher is rejected with
    ``ALREADY_PATCHED`` and changes nothing.

    Args:
        launcher: Path of the ``*Portable.exe`` launcher.
        replacement: Path of the universal launcher binary.

    Returns:
        SwapResult whose status is one of PATCHED, ALREADY_PATCHED,
        RENAME_FAILED, ROLLED_BACK or STUCK.
    """
    launcher = Path(launcher)
    backup = backup_path(launcher)

    if is_patched(launcher):
        return SwapResult(SwapStatus.ALREADY_PATCHED, launcher, backup,
                          f"already patched (found {backup.name})")

    log.info("Renaming %s to %s", launcher, backup)
    try:
        os.rename(launcher, backup)
    except OSError as e:
        log.warning("Rename failed for %s: %s", launcher, e)
        return SwapResult(SwapStatus.RENAME_FAILED, launcher, backup,
                          f"failed to rename original: {e}")

    try:
        install_copy(replacement, launcher)
    except OSError as e:
        log.warning("Install failed for %s: %s", launcher, e)
        cause = f"failed to copy universal launcher: {e}"
        _discard(launcher)
        try:
            os.replace(backup, launcher)
        except OSError as rollback_err:
            log.error("Rollback failed, original left at %s: %s", backup, rollback_err)
            return SwapResult(
                SwapStatus.STUCK, launcher, backup,
                f"{cause}; restore failed ({rollback_err}), original is at {backup}",
            )
        log.info("Rolled back %s", launcher)
        return SwapResult(SwapStatus.ROLLED_BACK, launcher, backup, cause)

    log.info("Patched %s", launcher)
    return SwapResult(SwapStatus.PATCHED, launcher, backup)


def refresh_launcher(launcher: PathLike, replacement: PathLike) -> SwapResult:
    """Overwrite an already-patched launcher with the current replacement.

    The new bytes go to a temporary file in the launcher's directory which
    is then moved over the live launcher, so a failure leaves the previous
    universal launcher in place.  The backup is never touched.
    """
    launcher = Path(launcher)
    backup = backup_path(launcher)

    if not is_patched(launcher):
        return SwapResult(SwapStatus.NOT_PATCHED, launcher, backup,
                          f"not patched (missing {backup.name})")

    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".~", suffix=launcher.suffix, dir=launcher.parent)
        os.close(fd)
        install_copy(replacement, tmp_path)
        os.replace(tmp_path, launcher)
    except OSError as e:
        log.warning("Update failed for %s: %s", launcher, e)
        if tmp_path is not None:
            _discard(tmp_path)
        return SwapResult(SwapStatus.INSTALL_FAILED, launcher, backup,
                          f"failed to update universal launcher: {e}")

    log.info("Updated %s", launcher)
    return SwapResult(SwapStatus.UPDATED, launcher, backup)

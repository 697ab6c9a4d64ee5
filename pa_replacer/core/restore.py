"""
Undo a swap: put ``*Portable_original.exe`` back in place of the universal
launcher.
"""
import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .layout import PathLike, launcher_path_for_backup

log = logging.getLogger(__name__)


class RestoreStatus(enum.Enum):
    RESTORED = "restored"
    INVALID_NAME = "invalid_name"
    RESTORE_FAILED = "restore_failed"


@dataclass(frozen=True)
class RestoreResult:
    status: RestoreStatus
    backup: Path
    launcher: Optional[Path]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is RestoreStatus.RESTORED


def restore_launcher(backup: PathLike) -> RestoreResult:
    """Move *backup* over its launcher, discarding the universal launcher.

    A missing live launcher is not an error: that is exactly the state a
    failed rollback leaves behind, and restoring recovers it.
    """
    backup = Path(backup)
    launcher = launcher_path_for_backup(backup)
    if launcher is None:
        return RestoreResult(RestoreStatus.INVALID_NAME, backup, None,
                             "file doesn't match expected '_original.exe' pattern")

    if not launcher.exists():
        log.warning("Live launcher %s missing, restoring anyway", launcher)

    try:
        os.replace(backup, launcher)
    except OSError as e:
        log.warning("Restore failed for %s: %s", backup, e)
        return RestoreResult(RestoreStatus.RESTORE_FAILED, backup, launcher,
                             f"failed to restore original launcher: {e}")

    log.info("Restored %s", launcher)
    return RestoreResult(RestoreStatus.RESTORED, backup, launcher)

"""
Launcher discovery, swap and restore.
"""

from .layout import backup_path, launcher_path_for_backup, has_portable_layout, is_patched
from .discovery import WalkPolicy, DiscoveryError, find_launchers, find_patched_launchers
from .swap import SwapStatus, SwapResult, swap_launcher, refresh_launcher
from .restore import RestoreStatus, RestoreResult, restore_launcher

__all__ = [
    "backup_path",
    "launcher_path_for_backup",
    "has_portable_layout",
    "is_patched",
    "WalkPolicy",
    "DiscoveryError",
    "find_launchers",
    "find_patched_launchers",
    "SwapStatus",
    "SwapResult",
    "swap_launcher",
    "refresh_launcher",
    "RestoreStatus",
    "RestoreResult",
    "restore_launcher",
]

"""
PortableApps Launcher Replacer

Finds PortableApps launchers (``*Portable.exe`` beside ``App/AppInfo``)
under a directory tree and swaps each for a shared universal launcher,
keeping the original as ``*Portable_original.exe`` so the change can be
reverted.

License: GPL-3.0
"""

__version__ = "1.0.0"
__author__ = "nursedude"
__license__ = "GPL-3.0"

from .config import Mode, ReplacerConfig, check_preconditions
from .core import (
    WalkPolicy,
    DiscoveryError,
    find_launchers,
    find_patched_launchers,
    SwapStatus,
    SwapResult,
    swap_launcher,
    refresh_launcher,
    RestoreStatus,
    RestoreResult,
    restore_launcher,
)

__all__ = [
    "Mode",
    "ReplacerConfig",
    "check_preconditions",
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

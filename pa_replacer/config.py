"""
Run configuration for the launcher replacer.

Everything a run needs is carried in a ReplacerConfig value built by the
command line (or a test) and passed into launcher.run(); nothing below
the entry point reads sys.argv or exits the process.
"""
import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .core.discovery import WalkPolicy
from .utils.common import DEFAULT_REPLACEMENT


class Mode(enum.Enum):
    SWAP = "swap"
    RESTORE = "restore"
    UPDATE = "update"


@dataclass
class ReplacerConfig:
    """Settings for one run."""

    root: Path
    replacement: Path = Path(DEFAULT_REPLACEMENT)
    mode: Mode = Mode.SWAP
    walk_policy: WalkPolicy = WalkPolicy.CONTINUE

    # Logging
    log_file: Optional[str] = None
    structured_log: bool = False
    verbose: bool = False

    # Report / interaction
    color: bool = True
    assume_yes: bool = False
    skip_running: bool = True

    def __post_init__(self):
        self.root = Path(self.root)
        self.replacement = Path(self.replacement)

    @property
    def needs_replacement(self) -> bool:
        return self.mode in (Mode.SWAP, Mode.UPDATE)


def check_preconditions(cfg: ReplacerConfig) -> List[str]:
    """Validate the paths a run depends on and return a list of errors.

    Returns an empty list when the run may proceed.
    """
    errors = []
    if not cfg.root.exists():
        errors.append(f"Directory '{cfg.root}' does not exist")
    elif not cfg.root.is_dir():
        errors.append(f"'{cfg.root}' is not a directory")

    if cfg.needs_replacement:
        rep = cfg.replacement
        if not rep.exists():
            errors.append(
                f"{DEFAULT_REPLACEMENT} not found at '{rep}'\n"
                f"Please ensure {DEFAULT_REPLACEMENT} is in the current directory or provide its path"
            )
        elif not rep.is_file():
            errors.append(f"Universal launcher '{rep}' is not a file")
        elif not os.access(rep, os.R_OK):
            errors.append(f"Universal launcher '{rep}' is not readable")
    return errors

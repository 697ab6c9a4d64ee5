"""
Console output for the launcher replacer.
"""

from .report import Reporter
from .widgets import C, strip_ansi

__all__ = ["Reporter", "C", "strip_ansi"]

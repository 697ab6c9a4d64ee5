"""
ANSI styling helpers for the console report.
"""
import re


# ── ANSI Styling ─────────────────────────────────────────────
class C:
    """Terminal color codes."""
    RST  = '\033[0m'
    BOLD = '\033[1m'
    RED  = '\033[91m'
    GRN  = '\033[92m'
    YLW  = '\033[93m'
    CYN  = '\033[96m'


_ANSI_RE = re.compile(r'\033\[[0-9;]*m')


# ── Helpers ──────────────────────────────────────────────────
def strip_ansi(text):
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_RE.sub('', text)


def paint(text, color, enabled=True):
    """Wrap *text* in *color* when *enabled*."""
    if not enabled:
        return text
    return f"{color}{text}{C.RST}"


def rule(title):
    """Underline *title* with '=' characters of the same visible width."""
    return "=" * len(strip_ansi(title))

"""
Version information for the PortableApps Launcher Replacer.
"""

MAJOR = 1
MINOR = 0
PATCH = 0
STATUS = ""


def get_version() -> str:
    """Get the full version string."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    return f"{base}-{STATUS}" if STATUS else base

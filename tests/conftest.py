import os
import sys

import pytest

# Ensure project root is on sys.path so pa_replacer.* and launcher import
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

POSIX = os.name == "posix"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "posix: mark test as relying on POSIX permission bits"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip POSIX-only tests elsewhere."""
    if POSIX:
        return
    skip_posix = pytest.mark.skip(reason="POSIX permission bits not available")
    for item in items:
        if "posix" in item.keywords:
            item.add_marker(skip_posix)


@pytest.fixture
def make_app(tmp_path):
    """Factory building ``<root>/<name>/PortableApps/<name>Portable/`` layouts.

    Returns the launcher path.
    """
    root = tmp_path / "root"

    def _make(name="Foo", content=b"A", appinfo=True, patched=False, parent=None):
        app_dir = (parent or root / name / "PortableApps") / f"{name}Portable"
        app_dir.mkdir(parents=True, exist_ok=True)
        if appinfo:
            (app_dir / "App" / "AppInfo").mkdir(parents=True, exist_ok=True)
        launcher = app_dir / f"{name}Portable.exe"
        launcher.write_bytes(content)
        if patched:
            (app_dir / f"{name}Portable_original.exe").write_bytes(b"ORIGINAL")
        return launcher

    root.mkdir()
    _make.root = root
    return _make


@pytest.fixture
def replacement(tmp_path):
    """Universal launcher binary with content b"B" and mode 0o751."""
    path = tmp_path / "UniversalLauncher.exe"
    path.write_bytes(b"B")
    os.chmod(path, 0o751)
    return path

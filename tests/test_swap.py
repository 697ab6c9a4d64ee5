"""Tests for pa_replacer/core/swap.py — swap transaction, rollback and refresh."""
import os
import stat
from unittest.mock import patch

import pytest

from pa_replacer.core.swap import SwapStatus, SwapResult, swap_launcher, refresh_launcher


def _mode(path):
    return stat.S_IMODE(os.stat(path).st_mode)


def _listing(directory):
    return sorted(p.name for p in directory.iterdir())


class TestSwapLauncher:
    def test_success(self, make_app, replacement):
        launcher = make_app()
        result = swap_launcher(launcher, replacement)
        assert result.status is SwapStatus.PATCHED
        assert result.ok
        assert result.error is None
        backup = launcher.with_name("FooPortable_original.exe")
        assert result.backup == backup
        assert backup.read_bytes() == b"A"
        assert launcher.read_bytes() == b"B"

    @pytest.mark.posix
    def test_permission_bits_copied(self, make_app, replacement):
        launcher = make_app()
        os.chmod(launcher, 0o600)
        swap_launcher(launcher, replacement)
        assert _mode(launcher) == _mode(replacement) == 0o751

    def test_no_stray_files(self, make_app, replacement):
        launcher = make_app()
        swap_launcher(launcher, replacement)
        assert _listing(launcher.parent) == ["App", "FooPortable.exe", "FooPortable_original.exe"]

    def test_second_call_already_patched(self, make_app, replacement):
        launcher = make_app()
        swap_launcher(launcher, replacement)
        snapshot = {p.name: p.read_bytes() for p in launcher.parent.iterdir() if p.is_file()}

        result = swap_launcher(launcher, replacement)
        assert result.status is SwapStatus.ALREADY_PATCHED
        assert not result.ok
        assert "already patched" in result.error
        assert "FooPortable_original.exe" in result.error
        after = {p.name: p.read_bytes() for p in launcher.parent.iterdir() if p.is_file()}
        assert after == snapshot

    def test_rename_failure_leaves_original(self, make_app, replacement):
        launcher = make_app()
        with patch("pa_replacer.core.swap.os.rename", side_effect=PermissionError("in use")):
            result = swap_launcher(launcher, replacement)
        assert result.status is SwapStatus.RENAME_FAILED
        assert "failed to rename original" in result.error
        assert launcher.read_bytes() == b"A"
        assert not result.backup.exists()

    def test_missing_launcher_is_rename_failure(self, tmp_path, replacement):
        result = swap_launcher(tmp_path / "GonePortable.exe", replacement)
        assert result.status is SwapStatus.RENAME_FAILED


class TestRollback:
    def test_copy_failure_rolls_back(self, make_app, replacement):
        launcher = make_app()
        with patch("pa_replacer.core.swap.shutil.copyfileobj", side_effect=OSError("disk full")):
            result = swap_launcher(launcher, replacement)
        assert result.status is SwapStatus.ROLLED_BACK
        assert "failed to copy universal launcher" in result.error
        assert "disk full" in result.error
        assert launcher.read_bytes() == b"A"
        assert not result.backup.exists()

    def test_unreadable_replacement_rolls_back(self, make_app, tmp_path):
        launcher = make_app()
        result = swap_launcher(launcher, tmp_path / "vanished.exe")
        assert result.status is SwapStatus.ROLLED_BACK
        assert launcher.read_bytes() == b"A"
        assert not result.backup.exists()

    def test_chmod_failure_rolls_back(self, make_app, replacement):
        launcher = make_app()
        with patch("pa_replacer.core.swap.shutil.copymode", side_effect=PermissionError("denied")):
            result = swap_launcher(launcher, replacement)
        assert result.status is SwapStatus.ROLLED_BACK
        assert launcher.read_bytes() == b"A"
        assert _listing(launcher.parent) == ["App", "FooPortable.exe"]

    def test_failed_rollback_is_stuck(self, make_app, replacement):
        launcher = make_app()
        with patch("pa_replacer.core.swap.shutil.copyfileobj", side_effect=OSError("disk full")), \
             patch("pa_replacer.core.swap.os.replace", side_effect=OSError("locked")):
            result = swap_launcher(launcher, replacement)
        assert result.status is SwapStatus.STUCK
        assert result.needs_attention
        assert not result.ok
        assert str(result.backup) in result.error
        assert result.backup.read_bytes() == b"A"
        assert not launcher.exists()


class TestSwapResult:
    def test_frozen(self, tmp_path):
        result = SwapResult(SwapStatus.PATCHED, tmp_path / "a", tmp_path / "b")
        with pytest.raises(AttributeError):
            result.status = SwapStatus.STUCK

    def test_only_success_is_ok(self, tmp_path):
        for status in SwapStatus:
            result = SwapResult(status, tmp_path / "a", tmp_path / "b")
            assert result.ok == (status in (SwapStatus.PATCHED, SwapStatus.UPDATED))


class TestRefreshLauncher:
    def test_updates_patched_launcher(self, make_app, replacement):
        launcher = make_app(patched=True)
        result = refresh_launcher(launcher, replacement)
        assert result.status is SwapStatus.UPDATED
        assert launcher.read_bytes() == b"B"
        assert result.backup.read_bytes() == b"ORIGINAL"

    def test_unpatched_rejected(self, make_app, replacement):
        launcher = make_app()
        result = refresh_launcher(launcher, replacement)
        assert result.status is SwapStatus.NOT_PATCHED
        assert launcher.read_bytes() == b"A"

    def test_failure_keeps_previous_launcher(self, make_app, replacement):
        launcher = make_app(content=b"OLD", patched=True)
        with patch("pa_replacer.core.swap.shutil.copyfileobj", side_effect=OSError("disk full")):
            result = refresh_launcher(launcher, replacement)
        assert result.status is SwapStatus.INSTALL_FAILED
        assert launcher.read_bytes() == b"OLD"
        assert _listing(launcher.parent) == ["App", "FooPortable.exe", "FooPortable_original.exe"]

    @pytest.mark.posix
    def test_refresh_copies_mode(self, make_app, replacement):
        launcher = make_app(patched=True)
        refresh_launcher(launcher, replacement)
        assert _mode(launcher) == 0o751

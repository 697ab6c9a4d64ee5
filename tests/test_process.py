"""Tests for pa_replacer/utils/process.py — running launcher detection."""
from pathlib import Path
from unittest.mock import MagicMock, patch

import psutil

from pa_replacer.utils.process import find_running, running_executables


def _proc(exe):
    proc = MagicMock()
    proc.info = {"exe": exe}
    return proc


class TestRunningExecutables:
    def test_collects_exe_paths(self, tmp_path):
        exe = tmp_path / "FooPortable.exe"
        with patch("pa_replacer.utils.process.psutil.process_iter",
                   return_value=[_proc(str(exe)), _proc(None), _proc("")]):
            result = running_executables()
        assert len(result) == 1

    def test_real_process_list(self):
        assert isinstance(running_executables(), set)


class TestFindRunning:
    def test_matches_running_launcher(self, tmp_path):
        busy = tmp_path / "BusyPortable.exe"
        idle = tmp_path / "IdlePortable.exe"
        with patch("pa_replacer.utils.process.psutil.process_iter",
                   return_value=[_proc(str(busy))]):
            assert find_running([busy, idle]) == {busy}

    def test_empty_input_skips_scan(self):
        with patch("pa_replacer.utils.process.psutil.process_iter") as mock_iter:
            assert find_running([]) == set()
        mock_iter.assert_not_called()

    def test_psutil_error_treated_as_none_running(self, tmp_path):
        with patch("pa_replacer.utils.process.psutil.process_iter",
                   side_effect=psutil.Error("boom")):
            assert find_running([tmp_path / "FooPortable.exe"]) == set()

    def test_no_match(self, tmp_path):
        with patch("pa_replacer.utils.process.psutil.process_iter",
                   return_value=[_proc("/usr/bin/python3")]):
            assert find_running([Path(tmp_path / "FooPortable.exe")]) == set()

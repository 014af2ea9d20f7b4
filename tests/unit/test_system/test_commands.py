"""
Unit tests for signalling and launching primitives.
"""

import gc
import shutil
import subprocess
import warnings
from unittest.mock import Mock, patch

import psutil
import pytest

from makeitrun.system import build_spawn_args, spawn_detached, terminate_process


@pytest.mark.unit
class TestTerminateProcess:
    """Test cases for terminate_process."""

    @patch("makeitrun.system.commands.psutil.Process")
    def test_sends_terminate(self, mock_process_class):
        mock_process = Mock()
        mock_process_class.return_value = mock_process

        assert terminate_process(1234) is True
        mock_process_class.assert_called_once_with(1234)
        mock_process.terminate.assert_called_once_with()

    @patch("makeitrun.system.commands.psutil.Process")
    def test_vanished_process_is_a_no_op(self, mock_process_class):
        mock_process_class.side_effect = psutil.NoSuchProcess(1234)

        assert terminate_process(1234) is False

    @patch("makeitrun.system.commands.psutil.Process")
    def test_process_exiting_before_signal_is_a_no_op(self, mock_process_class):
        mock_process_class.return_value.terminate.side_effect = psutil.NoSuchProcess(1234)

        assert terminate_process(1234) is False

    @patch("makeitrun.system.commands.psutil.Process")
    def test_access_denied_is_logged_not_raised(self, mock_process_class, caplog):
        mock_process_class.return_value.terminate.side_effect = psutil.AccessDenied(1234)

        assert terminate_process(1234) is False
        assert "process 1234" in caplog.text


@pytest.mark.unit
class TestSpawnDetached:
    """Test cases for spawn_detached."""

    def test_build_spawn_args_splits_like_a_shell(self):
        assert build_spawn_args("/usr/bin/perl job.pl --client") == ["/usr/bin/perl", "job.pl", "--client"]
        assert build_spawn_args("run 'a b'") == ["run", "a b"]

    def test_build_spawn_args_shell_passthrough(self):
        assert build_spawn_args("job.sh > out.log", shell=True) == "job.sh > out.log"

    def test_build_spawn_args_unbalanced_quotes(self):
        with pytest.raises(ValueError):
            build_spawn_args("run 'a b")

    @patch("makeitrun.system.commands.subprocess.Popen")
    def test_launches_detached_with_null_streams(self, mock_popen):
        mock_popen.return_value = Mock(pid=4321)

        assert spawn_detached("/usr/bin/myjob --client") == 4321

        args, kwargs = mock_popen.call_args
        assert args == (["/usr/bin/myjob", "--client"],)
        assert kwargs["shell"] is False
        assert kwargs["stdin"] is subprocess.DEVNULL
        assert kwargs["stdout"] is subprocess.DEVNULL
        assert kwargs["stderr"] is subprocess.DEVNULL
        assert kwargs["start_new_session"] is True

    @patch("makeitrun.system.commands.subprocess.Popen")
    def test_shell_mode_passes_string(self, mock_popen):
        mock_popen.return_value = Mock(pid=1)

        spawn_detached("/usr/bin/myjob --client", shell=True)

        args, kwargs = mock_popen.call_args
        assert args == ("/usr/bin/myjob --client",)
        assert kwargs["shell"] is True

    def test_missing_executable_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            spawn_detached(str(temp_dir / "does-not-exist --flag"))

    @patch("makeitrun.system.commands.subprocess.Popen")
    def test_dropped_handle_is_marked_finished(self, mock_popen):
        mock_popen.return_value = Mock(pid=4321, returncode=None)

        spawn_detached("/usr/bin/myjob --client")

        assert mock_popen.return_value.returncode == 0

    @pytest.mark.skipif(shutil.which("sleep") is None, reason="needs the sleep utility")
    def test_dropped_handle_emits_no_resource_warning(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            pid = spawn_detached(f"{shutil.which('sleep')} 30")
            gc.collect()

        try:
            assert not [w for w in caught if issubclass(w.category, ResourceWarning)]
        finally:
            psutil.Process(pid).kill()

"""
Tests for data models
"""

import threading
import pytest
from unittest.mock import Mock

from preferred_browser.exceptions import NoMatchingBrowserException
from preferred_browser.models import AvailableBrowser, BrowserInfo, BrowserInstance, OpenResult


def make_process(pid=321, exit_code=0, release=None):
    process = Mock()
    process.pid = pid

    def wait(timeout=None):
        if release is not None:
            release.wait(5)
        return exit_code

    process.wait.side_effect = wait
    return process


class TestBrowserInstance:
    """Test the started-browser wrapper"""

    def test_pid(self):
        """Test the process id."""
        instance = BrowserInstance(make_process(pid=555), "chrome")
        assert instance.pid == 555
        assert instance.exit_code is None

    def test_stop_handler_receives_exit_code(self):
        """Test the stop handler receiving the exit code."""
        release = threading.Event()
        instance = BrowserInstance(make_process(exit_code=3, release=release), "firefox")
        codes = []

        instance.on("stop", codes.append)
        release.set()
        instance._watcher.join(5)

        assert codes == [3]
        assert instance.exit_code == 3

    def test_handler_after_stop_fires_immediately(self):
        """Test a handler registered after the process stopped."""
        instance = BrowserInstance(make_process(exit_code=0), "opera")
        instance.on("stop", lambda code: None)
        instance._watcher.join(5)

        codes = []
        instance.on("stop", codes.append)
        assert codes == [0]

    def test_single_watcher_thread(self):
        """Test that one watcher thread serves all handlers."""
        release = threading.Event()
        instance = BrowserInstance(make_process(release=release), "chrome")
        instance.on("stop", lambda code: None)
        watcher = instance._watcher
        instance.on("stop", lambda code: None)

        assert instance._watcher is watcher
        release.set()
        watcher.join(5)

    def test_unknown_event(self):
        """Test registering an unknown event."""
        instance = BrowserInstance(make_process(), "chrome")
        with pytest.raises(ValueError):
            instance.on("exit", lambda code: None)


class TestOpenResult:
    """Test the open outcome"""

    def test_ok(self):
        """Test a successful result."""
        result = OpenResult(message="Started chrome successfully", command="chrome")
        assert result.ok
        assert result.to_dict()["message"] == "Started chrome successfully"

    def test_error(self):
        """Test a failed result."""
        result = OpenResult(error=NoMatchingBrowserException("none"))
        assert not result.ok
        assert result.to_dict() == {
            "ok": False,
            "error": "none",
            "message": None,
            "command": None,
            "pid": None,
        }


class TestDescriptors:
    """Test browser descriptors"""

    def test_available_browser_to_dict(self):
        """Test AvailableBrowser serialization."""
        browser = AvailableBrowser(name="chrome", version="120.0", type="chrome",
                                   command="/usr/bin/google-chrome")
        assert browser.to_dict() == {
            "name": "chrome",
            "version": "120.0",
            "type": "chrome",
            "command": "/usr/bin/google-chrome",
        }

    def test_browser_info_defaults(self):
        """Test BrowserInfo defaults."""
        info = BrowserInfo(common_name="safari")
        assert info.identifier == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

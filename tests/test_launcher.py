"""Tests for browser discovery and launching."""
import os
import plistlib
import subprocess
import pytest
from unittest.mock import Mock, patch

from preferred_browser.exceptions import LaunchFailedException
from preferred_browser.launcher import BrowserDefinition, BrowserLauncher, BROWSER_DEFINITIONS
from preferred_browser.models import BrowserInstance


CHROME = BrowserDefinition(
    name="chrome",
    type="chrome",
    linux=["google-chrome", "google-chrome-stable"],
    darwin=["/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"],
    windows=[r"Google\Chrome\Application\chrome.exe"],
)
FIREFOX = BrowserDefinition(name="firefox", type="firefox", linux=["firefox"])


def fake_which(installed):
    return lambda name: f"/usr/bin/{name}" if name in installed else None


@pytest.mark.unit
class TestDefinitions:
    """Tests for the built-in browser table."""

    def test_names_are_unique(self):
        """Test that definition names are unique."""
        names = [d.name for d in BROWSER_DEFINITIONS]
        assert len(names) == len(set(names))

    def test_common_browsers_are_known(self):
        """Test that common browsers have definitions."""
        names = {d.name for d in BROWSER_DEFINITIONS}
        assert {"chrome", "chromium", "firefox", "opera", "safari", "ie"} <= names


@pytest.mark.unit
class TestFindExecutable:
    """Tests for find_executable."""

    @patch('shutil.which')
    def test_linux_uses_first_found_variant(self, mock_which):
        """Test that the first installed Linux variant is used."""
        mock_which.side_effect = fake_which({"google-chrome-stable"})
        launcher = BrowserLauncher(platform="linux")
        assert launcher.find_executable(CHROME) == "/usr/bin/google-chrome-stable"

    @patch('shutil.which', return_value=None)
    def test_linux_not_installed(self, mock_which):
        """Test a browser missing on Linux."""
        launcher = BrowserLauncher(platform="linux")
        assert launcher.find_executable(CHROME) is None

    @patch('os.path.exists', return_value=True)
    def test_darwin_app_bundle(self, mock_exists):
        """Test finding a macOS app bundle."""
        launcher = BrowserLauncher(platform="darwin")
        assert launcher.find_executable(CHROME) == CHROME.darwin[0]

    def test_windows_program_files(self, tmp_path):
        """Test finding a browser under Program Files."""
        exe = tmp_path / "Google" / "Chrome" / "Application" / "chrome.exe"
        exe.parent.mkdir(parents=True)
        exe.write_bytes(b"")
        definition = BrowserDefinition(
            name="chrome", type="chrome", windows=[os.path.join("Google", "Chrome", "Application", "chrome.exe")]
        )
        launcher = BrowserLauncher(platform="win32")
        with patch.dict(os.environ, {"PROGRAMFILES": str(tmp_path)}, clear=True):
            assert launcher.find_executable(definition) == str(exe)

    def test_windows_not_installed(self, tmp_path):
        """Test a browser missing on Windows."""
        launcher = BrowserLauncher(platform="win32")
        with patch.dict(os.environ, {"PROGRAMFILES": str(tmp_path)}, clear=True):
            assert launcher.find_executable(CHROME) is None


@pytest.mark.unit
class TestGetVersion:
    """Tests for get_version."""

    @patch('subprocess.run')
    def test_version_from_output(self, mock_run):
        """Test parsing --version output."""
        mock_run.return_value = Mock(stdout="Google Chrome 120.0.6099.109 \n")
        launcher = BrowserLauncher(platform="linux")
        assert launcher.get_version("/usr/bin/google-chrome") == "120.0.6099.109"
        assert mock_run.call_args[0][0] == ["/usr/bin/google-chrome", "--version"]

    @patch('subprocess.run')
    def test_version_unparseable(self, mock_run):
        """Test --version output without a version."""
        mock_run.return_value = Mock(stdout="no version here")
        launcher = BrowserLauncher(platform="linux")
        assert launcher.get_version("/usr/bin/opera") == ""

    @patch('subprocess.run', side_effect=subprocess.TimeoutExpired("firefox", 5))
    def test_version_timeout(self, mock_run):
        """Test --version timing out."""
        launcher = BrowserLauncher(platform="linux")
        assert launcher.get_version("/usr/bin/firefox") == ""

    def test_version_from_app_bundle(self, tmp_path):
        """Test reading the version from Info.plist."""
        contents = tmp_path / "Firefox.app" / "Contents"
        (contents / "MacOS").mkdir(parents=True)
        with open(contents / "Info.plist", "wb") as f:
            plistlib.dump({"CFBundleShortVersionString": "121.0"}, f)

        launcher = BrowserLauncher(platform="darwin")
        assert launcher.get_version(str(contents / "MacOS" / "firefox")) == "121.0"

    def test_version_missing_bundle_plist(self, tmp_path):
        """Test an app bundle without Info.plist."""
        launcher = BrowserLauncher(platform="darwin")
        command = str(tmp_path / "Opera.app" / "Contents" / "MacOS" / "Opera")
        assert launcher.get_version(command) == ""


@pytest.mark.unit
class TestDetectAvailable:
    """Tests for detect_available."""

    @patch('subprocess.run')
    @patch('shutil.which')
    def test_lists_installed_browsers(self, mock_which, mock_run):
        """Test listing installed browsers."""
        mock_which.side_effect = fake_which({"firefox"})
        mock_run.return_value = Mock(stdout="Mozilla Firefox 115.6.0esr\n")
        launcher = BrowserLauncher(definitions=[CHROME, FIREFOX], platform="linux")

        available = launcher.detect_available()

        assert len(available) == 1
        assert available[0].name == "firefox"
        assert available[0].type == "firefox"
        assert available[0].version == "115.6.0"
        assert available[0].command == "/usr/bin/firefox"

    @patch('shutil.which', return_value=None)
    def test_nothing_installed(self, mock_which):
        """Test listing with nothing installed."""
        launcher = BrowserLauncher(definitions=[CHROME, FIREFOX], platform="linux")
        assert launcher.detect_available() == []


@pytest.mark.unit
class TestLaunch:
    """Tests for create and launch."""

    @patch('subprocess.Popen')
    @patch('shutil.which')
    def test_launch_starts_browser_with_url(self, mock_which, mock_popen):
        """Test launching a browser with the URL."""
        mock_which.side_effect = fake_which({"firefox"})
        mock_popen.return_value = Mock(pid=1234)
        launcher = BrowserLauncher(definitions=[CHROME, FIREFOX], platform="linux")

        launch = launcher.create()
        instance = launch("https://example.com", "firefox")

        assert isinstance(instance, BrowserInstance)
        assert instance.pid == 1234
        assert instance.command == "firefox"
        assert mock_popen.call_args[0][0] == ["/usr/bin/firefox", "https://example.com"]
        assert mock_popen.call_args[1]["stdout"] == subprocess.DEVNULL
        assert mock_popen.call_args[1]["stderr"] == subprocess.DEVNULL

    @patch('subprocess.Popen')
    @patch('shutil.which', return_value=None)
    def test_launch_unknown_browser(self, mock_which, mock_popen):
        """Test launching a browser that is not installed."""
        launcher = BrowserLauncher(definitions=[CHROME], platform="linux")
        launch = launcher.create()

        with pytest.raises(LaunchFailedException) as exc_info:
            launch("https://example.com", "chrome")

        assert exc_info.value.command == "chrome"
        mock_popen.assert_not_called()

    @patch('subprocess.Popen', side_effect=PermissionError("denied"))
    @patch('shutil.which')
    def test_launch_oserror(self, mock_which, mock_popen):
        """Test a browser that fails to start."""
        mock_which.side_effect = fake_which({"firefox"})
        launcher = BrowserLauncher(definitions=[FIREFOX], platform="linux")

        with pytest.raises(LaunchFailedException) as exc_info:
            launcher.create()("https://example.com", "firefox")

        assert exc_info.value.command == "firefox"

    @patch('subprocess.Popen', side_effect=ValueError("embedded null byte"))
    @patch('shutil.which')
    def test_launch_rejected_argument(self, mock_which, mock_popen):
        """Test that an argument the OS rejects becomes a launch failure."""
        mock_which.side_effect = fake_which({"firefox"})
        launcher = BrowserLauncher(definitions=[FIREFOX], platform="linux")

        with pytest.raises(LaunchFailedException) as exc_info:
            launcher.create()("https://example.com/\x00", "firefox")

        assert exc_info.value.command == "firefox"

    @patch('subprocess.Popen')
    @patch('shutil.which')
    def test_launch_without_create(self, mock_which, mock_popen):
        """Test launch before create."""
        mock_which.side_effect = fake_which({"firefox"})
        mock_popen.return_value = Mock(pid=99)
        launcher = BrowserLauncher(definitions=[FIREFOX], platform="linux")

        instance = launcher.launch("https://example.com", "firefox")

        assert instance.pid == 99

    @patch('subprocess.Popen')
    def test_launch_none_command(self, mock_popen):
        """Test launch without a browser name."""
        launcher = BrowserLauncher(definitions=[], platform="linux")
        with pytest.raises(LaunchFailedException):
            launcher.create()("https://example.com", None)
        mock_popen.assert_not_called()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

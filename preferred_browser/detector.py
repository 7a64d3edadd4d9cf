"""
Detection of the system default browser
"""

import plistlib
import subprocess
import sys
from pathlib import Path
from typing import Optional

from .exceptions import DetectionException
from .logger import get_logger
from .models import BrowserInfo


# Checked in order: "chromium" must match before "chrome"
COMMON_NAMES = [
    ("chromium", "chromium"),
    ("chrome", "chrome"),
    ("firefox", "firefox"),
    ("opera", "opera"),
    ("safari", "safari"),
    ("msedge", "edge"),
    ("edge", "edge"),
    ("iexplore", "ie"),
    ("ie.http", "ie"),
    ("brave", "brave"),
    ("vivaldi", "vivaldi"),
]

LAUNCH_SERVICES_PLIST = (
    Path("Library") / "Preferences" / "com.apple.LaunchServices"
    / "com.apple.launchservices.secure.plist"
)

USER_CHOICE_KEY = (
    r"Software\Microsoft\Windows\Shell\Associations\UrlAssociations\http\UserChoice"
)


def get_common_name(identifier: str) -> str:
    """
    Map a platform browser id to a common browser name

    Examples: "google-chrome.desktop" -> "chrome",
    "org.mozilla.firefox" -> "firefox", "MSEdgeHTM" -> "edge"

    Args:
        identifier: Desktop file id, bundle id or ProgId

    Returns:
        Common name, or the lower-cased stem for unknown browsers
    """
    lowered = identifier.lower()
    for marker, common_name in COMMON_NAMES:
        if marker in lowered:
            return common_name

    stem = lowered
    if stem.endswith(".desktop"):
        stem = stem[:-len(".desktop")]
    return stem.rsplit(".", 1)[-1]


class DefaultBrowserDetector:
    """Detects the OS-configured default browser"""

    def __init__(self, platform: Optional[str] = None, timeout: float = 5.0):
        self.platform = platform or sys.platform
        self.timeout = timeout
        self.logger = get_logger()

    def detect(self) -> BrowserInfo:
        """
        Detect the default browser

        Returns:
            BrowserInfo for the default browser

        Raises:
            DetectionException: If the default browser cannot be determined
        """
        if self.platform == "darwin":
            identifier = self._detect_macos()
        elif self.platform.startswith("win"):
            identifier = self._detect_windows()
        else:
            identifier = self._detect_xdg()

        info = BrowserInfo(common_name=get_common_name(identifier), identifier=identifier)
        self.logger.debug("Default browser: %s (%s)", info.common_name, identifier)
        return info

    def _detect_xdg(self) -> str:
        """Query xdg-settings on Linux and BSD desktops"""
        try:
            result = subprocess.run(
                ["xdg-settings", "get", "default-web-browser"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise DetectionException(f"Unable to run xdg-settings: {e}")

        identifier = result.stdout.strip()
        if result.returncode != 0 or not identifier:
            raise DetectionException("xdg-settings did not report a default browser")
        return identifier

    def _detect_macos(self) -> str:
        """Read the http handler from the LaunchServices preferences"""
        plist_path = Path.home() / LAUNCH_SERVICES_PLIST

        if not plist_path.exists():
            return "com.apple.safari"

        try:
            with open(plist_path, "rb") as f:
                data = plistlib.load(f)
        except (OSError, plistlib.InvalidFileException, ValueError) as e:
            raise DetectionException(f"Unable to read {plist_path}: {e}")

        handlers = data.get("LSHandlers", []) if isinstance(data, dict) else None
        if not isinstance(handlers, list):
            raise DetectionException(f"Unexpected LaunchServices data in {plist_path}")

        for handler in handlers:
            if not isinstance(handler, dict):
                continue
            if handler.get("LSHandlerURLScheme") == "http":
                bundle_id = handler.get("LSHandlerRoleAll")
                if bundle_id:
                    return bundle_id

        # Safari is used when no handler was ever chosen
        return "com.apple.safari"

    def _detect_windows(self) -> str:
        """Read the http UserChoice ProgId from the registry"""
        try:
            import winreg
        except ImportError as e:
            raise DetectionException(f"Windows registry is not available: {e}")

        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, USER_CHOICE_KEY) as key:
                prog_id, _ = winreg.QueryValueEx(key, "ProgId")
        except OSError as e:
            raise DetectionException(f"Unable to read default browser from registry: {e}")

        if not prog_id:
            raise DetectionException("Registry does not name a default browser")
        return prog_id


def detect_default_browser() -> BrowserInfo:
    """Detect the default browser of the running system"""
    return DefaultBrowserDetector().detect()

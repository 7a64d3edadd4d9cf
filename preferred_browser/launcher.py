"""
Discovery and launching of installed browsers
"""

import os
import plistlib
import re
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .capabilities import LaunchFunction
from .exceptions import LaunchFailedException
from .logger import get_logger
from .models import AvailableBrowser, BrowserInstance


VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


@dataclass
class BrowserDefinition:
    """Where to look for one browser on each platform"""
    name: str
    type: str
    linux: List[str] = field(default_factory=list)
    darwin: List[str] = field(default_factory=list)
    # Paths relative to Program Files / LocalAppData
    windows: List[str] = field(default_factory=list)


BROWSER_DEFINITIONS = [
    BrowserDefinition(
        name="chrome",
        type="chrome",
        linux=["google-chrome", "google-chrome-stable"],
        darwin=["/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"],
        windows=[r"Google\Chrome\Application\chrome.exe"],
    ),
    BrowserDefinition(
        name="chromium",
        type="chrome",
        linux=["chromium", "chromium-browser"],
        darwin=["/Applications/Chromium.app/Contents/MacOS/Chromium"],
        windows=[r"Chromium\Application\chrome.exe"],
    ),
    BrowserDefinition(
        name="canary",
        type="chrome",
        linux=["google-chrome-unstable"],
        darwin=["/Applications/Google Chrome Canary.app/Contents/MacOS/Google Chrome Canary"],
        windows=[r"Google\Chrome SxS\Application\chrome.exe"],
    ),
    BrowserDefinition(
        name="firefox",
        type="firefox",
        linux=["firefox", "firefox-esr"],
        darwin=["/Applications/Firefox.app/Contents/MacOS/firefox"],
        windows=[r"Mozilla Firefox\firefox.exe"],
    ),
    BrowserDefinition(
        name="opera",
        type="opera",
        linux=["opera"],
        darwin=["/Applications/Opera.app/Contents/MacOS/Opera"],
        windows=[r"Opera\launcher.exe"],
    ),
    BrowserDefinition(
        name="safari",
        type="safari",
        darwin=["/Applications/Safari.app/Contents/MacOS/Safari"],
    ),
    BrowserDefinition(
        name="edge",
        type="chrome",
        linux=["microsoft-edge", "microsoft-edge-stable"],
        darwin=["/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge"],
        windows=[r"Microsoft\Edge\Application\msedge.exe"],
    ),
    BrowserDefinition(
        name="ie",
        type="ie",
        windows=[r"Internet Explorer\iexplore.exe"],
    ),
    BrowserDefinition(
        name="brave",
        type="chrome",
        linux=["brave", "brave-browser", "brave-browser-stable"],
        darwin=["/Applications/Brave Browser.app/Contents/MacOS/Brave Browser"],
        windows=[r"BraveSoftware\Brave-Browser\Application\brave.exe"],
    ),
]


def _windows_roots() -> List[Path]:
    roots = []
    for var in ("PROGRAMFILES", "PROGRAMFILES(X86)", "LOCALAPPDATA"):
        value = os.environ.get(var)
        if value:
            roots.append(Path(value))
    return roots


class BrowserLauncher:
    """Finds installed browsers and starts them"""

    def __init__(self, definitions: Optional[List[BrowserDefinition]] = None,
                 platform: Optional[str] = None, timeout: float = 5.0):
        self.definitions = definitions if definitions is not None else BROWSER_DEFINITIONS
        self.platform = platform or sys.platform
        self.timeout = timeout
        self.logger = get_logger()
        self._commands: Optional[Dict[str, str]] = None

    def find_executable(self, definition: BrowserDefinition) -> Optional[str]:
        """
        Locate the executable of a browser on this platform

        Returns:
            Absolute command path or None if the browser is not installed
        """
        if self.platform == "darwin":
            for path in definition.darwin:
                if os.path.exists(path):
                    return path
            return None

        if self.platform.startswith("win"):
            for relative in definition.windows:
                for root in _windows_roots():
                    candidate = root / relative
                    if candidate.exists():
                        return str(candidate)
            return None

        for name in definition.linux:
            path = shutil.which(name)
            if path:
                return path
        return None

    def get_version(self, command: str) -> str:
        """
        Read the version of an installed browser

        App bundles on macOS are read from Info.plist, other platforms run
        ``<command> --version``. Returns an empty string when unknown.
        """
        if ".app/Contents/MacOS/" in command:
            info_plist = Path(command).parent.parent / "Info.plist"
            try:
                with open(info_plist, "rb") as f:
                    return plistlib.load(f).get("CFBundleShortVersionString", "")
            except (OSError, plistlib.InvalidFileException, ValueError):
                return ""

        if self.platform.startswith("win"):
            return ""

        try:
            result = subprocess.run(
                [command, "--version"],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired):
            return ""

        match = VERSION_PATTERN.search(result.stdout)
        return match.group(1) if match else ""

    def detect_available(self) -> List[AvailableBrowser]:
        """
        List the browsers installed on this system

        Returns:
            One AvailableBrowser per installed browser, in definition order
        """
        available = []
        for definition in self.definitions:
            command = self.find_executable(definition)
            if not command:
                continue
            available.append(AvailableBrowser(
                name=definition.name,
                version=self.get_version(command),
                type=definition.type,
                command=command,
            ))

        self.logger.debug("Available browsers: %s", ", ".join(b.name for b in available))
        return available

    def create(self) -> LaunchFunction:
        """
        Initialize the launcher

        Returns:
            The launch function, called as launch(url, name)
        """
        commands = {}
        for definition in self.definitions:
            command = self.find_executable(definition)
            if command:
                commands[definition.name] = command
        self._commands = commands
        return self.launch

    def launch(self, url: str, name: str) -> BrowserInstance:
        """
        Start the named browser with url

        Args:
            url: URL to open
            name: Browser name from the definition table

        Returns:
            BrowserInstance for the started process

        Raises:
            LaunchFailedException: If the browser is unknown or fails to start
        """
        if self._commands is None:
            self.create()

        command = self._commands.get(name) if name else None
        if not command:
            raise LaunchFailedException(f"Browser {name} is not installed", command=name)

        kwargs = {}
        if os.name == "posix":
            kwargs["start_new_session"] = True

        try:
            process = subprocess.Popen(
                [command, url],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **kwargs
            )
        except (OSError, ValueError) as e:
            raise LaunchFailedException(f"Unable to start {command}: {e}", command=name)

        self.logger.debug("Started %s (%s) with PID %s", name, command, process.pid)
        return BrowserInstance(process, name)

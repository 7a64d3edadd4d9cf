"""
Collaborator interfaces used by the browser selector
"""

from typing import Callable, List, Protocol, Tuple

from .models import AvailableBrowser, BrowserInfo, BrowserInstance


LaunchFunction = Callable[[str, str], BrowserInstance]


class DefaultBrowserDetectorProtocol(Protocol):
    """Reports the OS-configured default browser"""

    def detect(self) -> BrowserInfo:
        ...


class BrowserLauncherProtocol(Protocol):
    """Lists installed browsers and starts one of them"""

    def detect_available(self) -> List[AvailableBrowser]:
        ...

    def create(self) -> LaunchFunction:
        ...


class UrlOpenerProtocol(Protocol):
    """Opens a URL with the OS default handler"""

    def open(self, url: str) -> Tuple[str, str]:
        ...

"""
Browser selection: open a URL in a preferred browser

The user's default browser wins when it is on the preferred list. Otherwise
the installed browsers are searched and the earliest preferred one found is
started directly.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from .capabilities import (
    BrowserLauncherProtocol,
    DefaultBrowserDetectorProtocol,
    UrlOpenerProtocol,
)
from .config import OpenConfig
from .detector import DefaultBrowserDetector
from .exceptions import (
    InvalidConfigurationException,
    LaunchFailedException,
    NoMatchingBrowserException,
    OpenerException,
)
from .launcher import BrowserLauncher
from .logger import Logger, get_logger
from .models import AvailableBrowser, BrowserInfo, OpenResult
from .opener import UrlOpener


Callback = Callable[[Optional[Exception], Optional[str], Optional[str]], Any]


def format_browser_list(preferred_browsers: Sequence[str]) -> str:
    """Format browser names as [a,b,c]"""
    return "[" + ",".join(str(name) for name in preferred_browsers) + "]"


def get_browser_filter(preferred_browsers: Sequence[str]) -> Callable[[AvailableBrowser], bool]:
    """
    Build a predicate keeping browsers present in preferred_browsers

    Args:
        preferred_browsers: Acceptable browser names

    Returns:
        Function returning True for an AvailableBrowser on the list
    """
    def browser_filter(browser: AvailableBrowser) -> bool:
        return browser.name in preferred_browsers

    return browser_filter


def get_browser_command(preferred_browsers: Sequence[str],
                        available_browsers: List[AvailableBrowser]) -> Optional[str]:
    """
    Choose a browser in order of preference

    Args:
        preferred_browsers: Browser names, most preferred first
        available_browsers: Installed browsers

    Returns:
        First preferred name with an installed match, or None
    """
    for browser_name in preferred_browsers:
        if any(browser.name == browser_name for browser in available_browsers):
            return browser_name
    return None


def is_default_browser_good_enough(common_name: str, preferred_browsers: Sequence[str]) -> bool:
    """Check if the default browser is on the preferred list (exact match)"""
    return common_name in preferred_browsers


def default_callback(error: Optional[Exception], message: Optional[str] = None,
                     extra: Optional[str] = None) -> None:
    """Report errors on stderr and ignore everything else"""
    if error:
        get_logger().error("%s", error)


class BrowserSelector:
    """Opens URLs in the default browser or the best installed alternative"""

    def __init__(self,
                 detector: Optional[DefaultBrowserDetectorProtocol] = None,
                 launcher: Optional[BrowserLauncherProtocol] = None,
                 opener: Optional[UrlOpenerProtocol] = None,
                 logger: Optional[Logger] = None):
        self.detector = detector or DefaultBrowserDetector()
        self.launcher = launcher or BrowserLauncher()
        self.opener = opener or UrlOpener()
        self.logger = logger or get_logger()

    def open(self, url: str,
             config: Union[OpenConfig, Mapping[str, Any], None] = None,
             callback: Optional[Callback] = None) -> OpenResult:
        """
        Open url in a preferred browser

        The callback is invoked exactly once, as callback(error, message, extra),
        and the same outcome is returned as an OpenResult.

        Args:
            url: URL to open, passed through unvalidated
            config: OpenConfig or a mapping; defaults to OpenConfig()
            callback: Completion handler; defaults to printing errors to stderr

        Returns:
            OpenResult
        """
        if callback is None:
            callback = default_callback

        if config is None:
            config = OpenConfig()
        elif isinstance(config, Mapping):
            config = OpenConfig.from_dict(config)

        try:
            config.validate()
        except InvalidConfigurationException as e:
            return self._finish(callback, OpenResult(error=e))

        result = self._select_and_open(url, config)
        return self._finish(callback, result)

    def _finish(self, callback: Callback, result: OpenResult) -> OpenResult:
        callback(result.error, result.message, result.extra)
        return result

    def _say(self, config: OpenConfig, message: str) -> None:
        if config.verbose:
            self.logger.console(message)
        else:
            self.logger.debug(message)

    def _select_and_open(self, url: str, config: OpenConfig) -> OpenResult:
        preferred_browsers = list(config.preferred_browsers)

        browser_info: Optional[BrowserInfo] = None
        try:
            browser_info = self.detector.detect()
        except Exception as e:
            self._say(config, f"Unable to detect the default browser ({e}); looking for "
                              f"browsers matching {format_browser_list(preferred_browsers)}...")

        if browser_info is not None:
            if is_default_browser_good_enough(browser_info.common_name, preferred_browsers):
                self._say(config, "Using default browser via opener; it should open "
                                  + browser_info.common_name)
                return self._use_opener(url)

            self._say(config, f"Default browser is {browser_info.common_name}; looking further "
                              f"for browsers matching {format_browser_list(preferred_browsers)}...")

        available_browsers = self.launcher.detect_available()
        available_browsers = list(filter(get_browser_filter(preferred_browsers),
                                         available_browsers))

        if not available_browsers:
            message = (f"No browser matching {format_browser_list(preferred_browsers)} "
                       f"found in the system! If this is not true, please report a bug.")
            self._say(config, message)
            return OpenResult(error=NoMatchingBrowserException(message, preferred_browsers))

        command = get_browser_command(preferred_browsers, available_browsers)

        try:
            launch = self.launcher.create()
            instance = launch(url, command)
        except (LaunchFailedException, OSError) as e:
            message = f"Unable to start the executable of {command}"
            self.logger.debug("%s: %s", message, e)
            self._say(config, message)
            return OpenResult(error=LaunchFailedException(message, command=command),
                              command=command)

        if config.verbose:
            self.logger.console(f"Browser {command} started with PID: {instance.pid}")
            instance.on("stop", lambda code: self.logger.console(
                f"Instance stopped with exit code: {code}"))

        return OpenResult(message=f"Started {command} successfully",
                          command=command, instance=instance)

    def _use_opener(self, url: str) -> OpenResult:
        try:
            stdout, stderr = self.opener.open(url)
        except (OpenerException, OSError) as e:
            return OpenResult(error=e,
                              message=getattr(e, "stdout", None) or None,
                              extra=getattr(e, "stderr", None) or None)
        return OpenResult(message=stdout, extra=stderr)


def open_url(url: str,
             config: Union[OpenConfig, Mapping[str, Any], None] = None,
             callback: Optional[Callback] = None) -> OpenResult:
    """
    Open url in a preferred browser using the platform collaborators

    See BrowserSelector.open.
    """
    return BrowserSelector().open(url, config, callback)

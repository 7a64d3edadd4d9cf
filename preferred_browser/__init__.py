"""
preferred-browser

Open URLs in the user's default browser when it is on a preference list,
otherwise in the first preferred browser installed on the system.
"""

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "0.0.0+unknown"

from .models import AvailableBrowser, BrowserInfo, BrowserInstance, OpenResult
from .exceptions import (
    PreferredBrowserException,
    InvalidConfigurationException,
    NoMatchingBrowserException,
    LaunchFailedException,
    DetectionException,
    OpenerException,
)
from .config import Config, OpenConfig, DEFAULT_PREFERRED_BROWSERS, is_sequence
from .logger import Logger, LogLevel, get_logger
from .detector import DefaultBrowserDetector, detect_default_browser, get_common_name
from .launcher import BrowserLauncher, BrowserDefinition, BROWSER_DEFINITIONS
from .opener import UrlOpener, get_browser_command, get_opener_command
from .selector import (
    BrowserSelector,
    open_url,
    get_browser_filter,
    get_browser_command as select_browser_command,
    is_default_browser_good_enough,
    format_browser_list,
)

__all__ = [
    "AvailableBrowser",
    "BrowserInfo",
    "BrowserInstance",
    "OpenResult",
    "PreferredBrowserException",
    "InvalidConfigurationException",
    "NoMatchingBrowserException",
    "LaunchFailedException",
    "DetectionException",
    "OpenerException",
    "Config",
    "OpenConfig",
    "DEFAULT_PREFERRED_BROWSERS",
    "is_sequence",
    "Logger",
    "LogLevel",
    "get_logger",
    "DefaultBrowserDetector",
    "detect_default_browser",
    "get_common_name",
    "BrowserLauncher",
    "BrowserDefinition",
    "BROWSER_DEFINITIONS",
    "UrlOpener",
    "get_browser_command",
    "get_opener_command",
    "BrowserSelector",
    "open_url",
    "get_browser_filter",
    "select_browser_command",
    "is_default_browser_good_enough",
    "format_browser_list",
]

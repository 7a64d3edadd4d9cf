"""
Generic URL opener using the OS default handler
"""

import os
import shlex
import subprocess
import sys
from typing import List, Optional, Tuple

from .exceptions import OpenerException
from .logger import get_logger


def get_browser_command() -> Optional[str]:
    """
    Get the $BROWSER override, if any

    Returns:
        Browser command or None if using the system handler
    """
    return os.environ.get('BROWSER')


def get_opener_command(url: str, platform: Optional[str] = None) -> List[str]:
    """
    Build the argv that opens url with the platform handler

    Args:
        url: URL to open
        platform: sys.platform value, defaults to the running platform

    Returns:
        Command argument list
    """
    platform = platform or sys.platform

    browser_cmd = get_browser_command()
    if browser_cmd:
        if '%s' in browser_cmd:
            return [part.replace('%s', url) for part in shlex.split(browser_cmd)]
        return shlex.split(browser_cmd) + [url]

    if platform == 'darwin':
        return ['open', url]
    if platform.startswith('win'):
        # The empty string is the window title expected by start
        return ['cmd', '/c', 'start', '', url.replace('&', '^&')]
    return ['xdg-open', url]


class UrlOpener:
    """Opens URLs with whatever the OS considers the default handler"""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout
        self.logger = get_logger()

    def open(self, url: str) -> Tuple[str, str]:
        """
        Open URL with the OS handler

        Args:
            url: URL to open, passed through unchanged

        Returns:
            (stdout, stderr) of the handler process

        Raises:
            OpenerException: If the handler cannot be started or exits non-zero
        """
        command = get_opener_command(url)
        self.logger.debug("Opening %s with %s", url, command[0])

        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, ValueError, subprocess.TimeoutExpired) as e:
            raise OpenerException(f"Unable to open {url} with {command[0]}: {e}")

        if result.returncode != 0:
            raise OpenerException(
                f"{command[0]} exited with code {result.returncode}",
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return result.stdout, result.stderr

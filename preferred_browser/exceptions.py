"""
Exception types for preferred-browser
"""

from typing import Optional, Sequence


class PreferredBrowserException(Exception):
    """Base exception for all preferred-browser errors"""
    pass


class InvalidConfigurationException(PreferredBrowserException):
    """Raised when the open configuration is malformed"""
    pass


class NoMatchingBrowserException(PreferredBrowserException):
    """Raised when no installed browser matches the preference list"""
    
    def __init__(self, message: str, preferred_browsers: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.preferred_browsers = list(preferred_browsers or [])


class LaunchFailedException(PreferredBrowserException):
    """Raised when a browser executable could not be started"""
    
    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message)
        self.command = command


class DetectionException(PreferredBrowserException):
    """Raised when the system default browser cannot be determined"""
    pass


class OpenerException(PreferredBrowserException):
    """Raised when the OS URL handler fails"""
    
    def __init__(self, message: str, stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr

"""
Configuration management for preferred-browser
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List, Mapping

from .exceptions import InvalidConfigurationException


DEFAULT_PREFERRED_BROWSERS = ["chrome"]


def is_sequence(value: Any) -> bool:
    """Check that value is an ordered sequence of browser names (list or tuple)"""
    return isinstance(value, (list, tuple))


@dataclass
class OpenConfig:
    """Per-call options for opening a URL"""
    verbose: bool = False
    preferred_browsers: List[str] = field(
        default_factory=lambda: list(DEFAULT_PREFERRED_BROWSERS)
    )

    def validate(self) -> None:
        """
        Validate the configuration

        Raises:
            InvalidConfigurationException: If preferred_browsers is not a list
        """
        if not is_sequence(self.preferred_browsers):
            raise InvalidConfigurationException("preferred_browsers has to be a list")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'OpenConfig':
        """
        Build a configuration from a mapping

        Both ``preferred_browsers`` and ``preferredBrowsers`` are accepted.
        A missing key leaves preferred_browsers as None, which fails validation.
        """
        if "preferred_browsers" in data:
            preferred = data["preferred_browsers"]
        else:
            preferred = data.get("preferredBrowsers")
        return cls(verbose=bool(data.get("verbose", False)), preferred_browsers=preferred)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verbose": self.verbose,
            "preferred_browsers": list(self.preferred_browsers),
        }


class Config:
    """Configuration file manager"""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = self._get_config_dir()
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_config_dir() -> Path:
        """Get configuration directory"""
        # PREFBROWSER_HOME overrides everything
        home = os.environ.get("PREFBROWSER_HOME")
        if home:
            return Path(home)

        if "XDG_CONFIG_HOME" in os.environ:
            config_home = Path(os.environ["XDG_CONFIG_HOME"])
        else:
            config_home = Path.home() / ".config"
        return config_home / "prefbrowser"

    def _load(self) -> Dict[str, Any]:
        """Load configuration from file"""
        if self._config is not None:
            return self._config

        if not self.config_file.exists():
            self._config = {}
            return self._config

        try:
            with open(self.config_file, 'r') as f:
                self._config = json.load(f)
        except (OSError, ValueError):
            self._config = {}

        return self._config

    def _save(self) -> None:
        """Save configuration to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True, mode=0o700)

        with open(self.config_file, 'w') as f:
            json.dump(self._config or {}, f, indent=2)

        os.chmod(self.config_file, 0o600)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        config = self._load()
        return config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value"""
        config = self._load()
        config[key] = value
        self._save()

    def delete(self, key: str) -> None:
        """Delete configuration value"""
        config = self._load()
        if key in config:
            del config[key]
            self._save()

    def get_open_config(self) -> OpenConfig:
        """
        Build the user's default open configuration

        Values from config.json are overridden by PREFBROWSER_PREFERRED and
        PREFBROWSER_VERBOSE.

        Returns:
            OpenConfig
        """
        preferred = self.get_preferred_browsers()
        if preferred is None:
            preferred = self.get("preferred_browsers", list(DEFAULT_PREFERRED_BROWSERS))

        verbose = self.is_verbose() or bool(self.get("verbose", False))

        return OpenConfig(verbose=verbose, preferred_browsers=preferred)

    @staticmethod
    def get_preferred_browsers() -> Optional[List[str]]:
        """Get preferred browsers from environment (comma separated)"""
        value = os.environ.get("PREFBROWSER_PREFERRED")
        if not value:
            return None
        return [name.strip() for name in value.split(",") if name.strip()]

    @staticmethod
    def is_verbose() -> bool:
        """Check if verbose output is forced by the environment"""
        return os.environ.get("PREFBROWSER_VERBOSE") == "1"

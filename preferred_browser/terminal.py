"""
Terminal output formatting with color support
"""

import os
import sys
from enum import Enum
from typing import Optional


class ColorMode(Enum):
    """Color output modes"""
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


RESET = "\033[0m"
BOLD = "\033[1m"
FG_RED = "\033[31m"
FG_GREEN = "\033[32m"
FG_YELLOW = "\033[33m"
FG_CYAN = "\033[36m"


class Terminal:
    """Colored output for the command line"""

    _color_mode: ColorMode = ColorMode.AUTO
    _color_enabled: Optional[bool] = None

    @classmethod
    def set_color_mode(cls, mode: ColorMode) -> None:
        """Set color output mode"""
        cls._color_mode = mode
        cls._color_enabled = None

    @classmethod
    def parse_color_mode(cls, mode_str: str) -> ColorMode:
        """Parse color mode string, unknown values mean auto"""
        try:
            return ColorMode(mode_str.lower())
        except ValueError:
            return ColorMode.AUTO

    @classmethod
    def is_color_enabled(cls) -> bool:
        """Check if color output is enabled"""
        if cls._color_enabled is not None:
            return cls._color_enabled

        if cls._color_mode == ColorMode.ALWAYS:
            cls._color_enabled = True
        elif cls._color_mode == ColorMode.NEVER:
            cls._color_enabled = False
        else:
            term = os.environ.get('TERM', '')
            cls._color_enabled = (
                sys.stdout.isatty()
                and not os.environ.get('NO_COLOR')
                and term not in ('', 'dumb')
            )

        return cls._color_enabled

    @classmethod
    def colorize(cls, text: str, *codes: str) -> str:
        """Apply color codes to text"""
        if not cls.is_color_enabled():
            return text
        return f"{''.join(codes)}{text}{RESET}"

    @classmethod
    def success(cls, text: str) -> str:
        return cls.colorize(text, FG_GREEN, BOLD)

    @classmethod
    def error(cls, text: str) -> str:
        return cls.colorize(text, FG_RED, BOLD)

    @classmethod
    def header(cls, text: str) -> str:
        return cls.colorize(text, FG_YELLOW, BOLD)

    @classmethod
    def info(cls, text: str) -> str:
        return cls.colorize(text, FG_CYAN)

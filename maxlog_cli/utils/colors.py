"""
Color utilities for terminal output.

Besides the plain ANSI codes, this module holds the closed set of label
kinds used by the line annotator and the status symbols used for
diagnostics.
"""

from enum import Enum


class Colors:
    """ANSI color codes for terminal output."""

    # Foreground colors
    BLACK = '\033[30m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    LIGHT_GRAY = '\033[37m'
    DARK_GRAY = '\033[90m'
    LIGHT_RED = '\033[91m'
    LIGHT_GREEN = '\033[92m'
    LIGHT_YELLOW = '\033[93m'
    LIGHT_BLUE = '\033[94m'
    LIGHT_MAGENTA = '\033[95m'
    LIGHT_CYAN = '\033[96m'
    WHITE = '\033[97m'

    # Background colors
    BG_BLACK = '\033[40m'
    BG_RED = '\033[41m'
    BG_GREEN = '\033[42m'
    BG_YELLOW = '\033[43m'
    BG_BLUE = '\033[44m'
    BG_MAGENTA = '\033[45m'
    BG_CYAN = '\033[46m'
    BG_LIGHT_GRAY = '\033[47m'
    BG_LIGHT_BLUE = '\033[104m'

    # Reset
    RESET = '\033[0m'

    @staticmethod
    def colorize(text: str, color: str) -> str:
        """Apply color to text."""
        return f"{color}{text}{Colors.RESET}"

    @staticmethod
    def error(text: str, use_nerdfont: bool = True) -> str:
        """Format text as error message, prefixed with the error symbol when glyphs are enabled."""
        return Symbol.ERROR.prefix(use_nerdfont) + Colors.colorize(text, Colors.RED)

    @staticmethod
    def warning(text: str, use_nerdfont: bool = True) -> str:
        """Format text as warning message, prefixed with the warning symbol when glyphs are enabled."""
        return Symbol.WARN.prefix(use_nerdfont) + Colors.colorize(text, Colors.YELLOW)


class LabelKind(Enum):
    """Color schemes a log label can be drawn with, as (foreground, background)."""

    BLUE = (Colors.BLUE, Colors.BG_BLUE)
    LIGHT_BLUE = (Colors.LIGHT_BLUE, Colors.BG_LIGHT_BLUE)
    YELLOW = (Colors.YELLOW, Colors.BG_YELLOW)
    RED = (Colors.RED, Colors.BG_RED)
    MAGENTA = (Colors.MAGENTA, Colors.BG_MAGENTA)
    CYAN = (Colors.CYAN, Colors.BG_CYAN)
    GREEN = (Colors.GREEN, Colors.BG_GREEN)

    @property
    def foreground(self) -> str:
        return self.value[0]

    @property
    def background(self) -> str:
        return self.value[1]


class Symbol(Enum):
    """Nerd Font status glyphs with the color they are drawn in."""

    ERROR = ("\uebfb", Colors.RED)
    WARN = ("\uf071", Colors.YELLOW)

    def render(self) -> str:
        glyph, color = self.value
        return Colors.colorize(glyph, color)

    def prefix(self, use_nerdfont: bool = True) -> str:
        """The rendered glyph and a space, or nothing without a Nerd Font."""
        return f"{self.render()} " if use_nerdfont else ""

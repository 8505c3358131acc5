"""Console logger for the midpoint engine and its CLI."""
import sys
from typing import Optional, TextIO


class Logger:
    """Small logger with clean, optionally coloured output."""

    # ANSI color codes
    BLUE = "\033[94m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD = "\033[1m"
    END = "\033[0m"

    def __init__(self, verbose: bool = False, use_colors: bool = True, stream: Optional[TextIO] = None):
        self.verbose = verbose
        self.use_colors = use_colors
        self.stream = stream
        self.indent_level = 0

    def _out(self) -> TextIO:
        return self.stream or sys.stdout

    def _err(self) -> TextIO:
        return self.stream or sys.stderr

    def _indent(self) -> str:
        return "  " * self.indent_level

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors:
            return f"{color}{text}{self.END}"
        return text

    def info(self, message: str):
        """Log info message (verbose only)."""
        if self.verbose:
            print(f"{self._indent()}{message}", file=self._out())

    def success(self, message: str):
        if self.verbose:
            print(f"{self._indent()}{self._color('✓', self.GREEN)} {message}", file=self._out())

    def warning(self, message: str):
        print(f"{self._indent()}{self._color('⚠', self.YELLOW)} {message}", file=self._err())

    def error(self, message: str):
        print(f"{self._indent()}{self._color('✗', self.RED)} {message}", file=self._err())

    def debug(self, message: str):
        if self.verbose:
            print(f"{self._indent()}{self._color('[DEBUG]', self.YELLOW)} {message}", file=self._out())

    def section(self, title: str):
        """Section header. Always shown: the CLI report is built from these."""
        print(f"\n{self._color('▶', self.BLUE)} {self._color(title, self.BOLD)}", file=self._out())
        self.indent_level = 1

    def item(self, message: str, status: Optional[str] = None):
        if status:
            print(f"{self._indent()}• {message} {self._color(f'[{status}]', self.YELLOW)}", file=self._out())
        else:
            print(f"{self._indent()}• {message}", file=self._out())

    def stats(self, label: str, value: str, unit: str = ""):
        print(f"{self._indent()}{self._color(label + ':', self.BOLD)} {value} {unit}".rstrip(), file=self._out())


# Global logger instance
logger = Logger()


def configure_logger(verbose: Optional[bool] = None, use_colors: Optional[bool] = None,
                     stream: Optional[TextIO] = None) -> Logger:
    """
    Reconfigure the shared logger in place.

    Modules hold a reference to `logger` from import time, so it is
    mutated rather than replaced.
    """
    if verbose is not None:
        logger.verbose = verbose
    if use_colors is not None:
        logger.use_colors = use_colors
    if stream is not None:
        logger.stream = stream
    logger.indent_level = 0
    return logger

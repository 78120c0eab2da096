"""
debug.py - Logging facade for the Connect Four core

This module wraps the standard logging machinery behind a single manager
object so that game components can log with a level and a component tag
("state", "controller", "scheduler", ...) and have those messages filtered
from one place.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG - 5,
}

# ANSI colours used by the console formatter
COLORS = {
    logging.ERROR: "\033[31m",
    logging.WARNING: "\033[33m",
    logging.INFO: "\033[32m",
    logging.DEBUG: "\033[36m",
    logging.DEBUG - 5: "\033[35m",
}
RESET = "\033[0m"

logging.addLevelName(LEVEL_MAP[DebugLevel.TRACE], "TRACE")


class _ConsoleFormatter(logging.Formatter):
    """Formatter that tints the level name when writing to a terminal."""

    def __init__(self, use_color: bool):
        super().__init__('%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                         datefmt='%H:%M:%S')
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if self.use_color and record.levelno in COLORS:
            return f"{COLORS[record.levelno]}{text}{RESET}"
        return text


class DebugManager:
    """Central switchboard for Connect Four logging."""

    def __init__(self, logger_name: str = "connectfour"):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(LEVEL_MAP[self._level])
        self._logger.propagate = True
        self._console: Optional[logging.Handler] = None

    @property
    def level(self) -> DebugLevel:
        return self._level

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def enable_console(self, stream=None, use_color: Optional[bool] = None):
        """Attach a console handler (once) writing to ``stream``."""
        stream = stream or sys.stdout
        if use_color is None:
            use_color = hasattr(stream, "isatty") and stream.isatty()
        if self._console is not None:
            self._logger.removeHandler(self._console)
        self._console = logging.StreamHandler(stream)
        self._console.setFormatter(_ConsoleFormatter(use_color))
        self._logger.addHandler(self._console)

    def disable_console(self):
        if self._console is not None:
            self._logger.removeHandler(self._console)
            self._console = None

    def configure(self, level: Optional[DebugLevel] = None,
                  enabled: Optional[bool] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None):
        """
        Configure the manager.

        Args:
            level: Minimum level to emit
            enabled: Master on/off switch
            log_file: Path of a log file; an empty string detaches file logging
            components: Component names to keep (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()
            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._components = set(components)

    def _should_log(self, level: DebugLevel, component: Optional[str]) -> bool:
        if not self._enabled or level == DebugLevel.NONE:
            return False
        if level.value > self._level.value:
            return False
        if component and self._components and component not in self._components:
            return False
        return True

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None):
        """Log ``message`` at ``level``, tagged with ``component``."""
        if not self._should_log(level, component):
            return
        if component:
            message = f"[{component}] {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker_name: str):
        """Start a performance marker."""
        self._timers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a performance marker and log the elapsed time.

        Returns:
            Elapsed seconds, or None if the marker was never started
        """
        started = self._timers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None
        elapsed = time.perf_counter() - started
        self.trace(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a command line string such as ``"debug"``."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False
        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


# Shared instance used throughout the package
debug = DebugManager()

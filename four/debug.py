"""
debug.py - Logging for the Four console driver

A single DebugManager wraps the "four" logger. The driver picks the level,
optionally restricts output to some components ("cli", "benchmark") and can
mirror messages into a log file. The game core in four.game never logs.
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


# logging has no TRACE; it shares DEBUG and is marked in the message instead
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 1,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

COMPONENTS = ('cli', 'benchmark')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Level and component filtered logging plus named timers for the driver."""

    def __init__(self, name: str = "four"):
        self._level = DebugLevel.WARNING
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}

        self._logger = logging.getLogger(name)
        self._logger.setLevel(LEVEL_MAP[self._level])
        self._logger.propagate = False
        if not self._logger.handlers:
            # stderr keeps log lines out of the rendered board on stdout
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            self._logger.addHandler(console)

    @property
    def level(self) -> DebugLevel:
        return self._level

    @property
    def components(self) -> Set[str]:
        return set(self._components)

    def configure(self, level: DebugLevel = None, log_file: str = None,
                  components: Iterable[str] = None):
        """
        Apply driver settings. Arguments left as None keep their current value.

        Args:
            level: Most verbose level that is emitted
            log_file: Path to mirror messages into; an empty string closes the file
            components: Components to emit for; empty for all of them
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if log_file is not None:
            self._set_log_file(log_file)

        if components is not None:
            self._components = set(components)

    def _set_log_file(self, path: str):
        for handler in [h for h in self._logger.handlers if isinstance(h, logging.FileHandler)]:
            self._logger.removeHandler(handler)
            handler.close()

        if path:
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            self._logger.addHandler(file_handler)

    def enabled_for(self, level: DebugLevel, component: str = None) -> bool:
        """Whether a message at ``level`` from ``component`` would be emitted."""
        if level == DebugLevel.NONE or level.value > self._level.value:
            return False
        return not (component and self._components and component not in self._components)

    def log(self, level: DebugLevel, message: str, component: str = None):
        if not self.enabled_for(level, component):
            return

        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, name: str):
        """Start (or restart) the named timer."""
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, component: str = None) -> Optional[float]:
        """
        Stop the named timer and log the elapsed time at DEBUG level.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._timers.pop(name, None)
        if started is None:
            self.warning(f"Timer '{name}' not started", component)
            return None

        elapsed = time.perf_counter() - started
        self.debug(f"{name} took {elapsed:.6f} seconds", component)
        return elapsed


debug = DebugManager()

"""Opt-in loguru output for tree induction.

Tree growing logs one SPLIT record per accepted split, INFO records around
each build, and DEBUG records explaining why every leaf was created. All of it
is silent until `enable_logging()` is called.

Importing this module drops loguru's default stderr sink (handler 0) so the
sink added by `enable_logging()` is the only one printing c45tree records. If
the host application already replaced handler 0 nothing is removed.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Ranks above INFO and below WARNING
SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 25


def _register_split_level() -> None:
    """Add the SPLIT level to loguru unless an identical one exists.

    Registering twice with another number is refused by loguru, so a clash
    only warns.
    """
    try:
        existing_level = logger.level(SPLIT_LEVEL)
    except ValueError:
        logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER, icon="🌳")
    else:
        if existing_level.no != SPLIT_LEVEL_NUMBER:
            msg = f"SPLIT level already registered with numeric value {existing_level.no}, expected {SPLIT_LEVEL_NUMBER}"
            warnings.warn(msg, stacklevel=2)


_register_split_level()

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "SPLIT",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]


class LoggingHandle:
    """Owns one stderr sink added by `enable_logging()`.

    The c45tree logger stays enabled while any handle is live; disabling the
    last one silences growth records again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = build_decision_tree(dataset)
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Initialize the logging handle.

        Args:
            handler_id (int): ID of the sink this handle removes on disable.
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's sink. Safe to call more than once."""
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Enter context manager.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Remove the sink when the block ends."""
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return the number of currently active logging handles.

        Returns:
            int: Handles whose sink is still attached.
        """
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = SPLIT_LEVEL,
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Print c45tree growth records to stderr.

    Args:
        level (LogLevel): Minimum log level to display. Defaults to "SPLIT",
            which shows one line per accepted split. Lower to "DEBUG" to see
            attribute scores and the reason each leaf was created.
        log_format (LogFormat): "short" (default) shows the function name only;
            "full" shows module:function:line.

    Returns:
        LoggingHandle: Handle that removes the sink, directly or as a context manager.
    """
    logger.enable(PACKAGE_NAME)

    if log_format == "short":
        format_str = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
            "<cyan>{function}</cyan> - "
            "<level>{message}</level> {extra}"
        )
    else:
        format_str = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level> {extra}"
        )

    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_c45tree_record,
        format=format_str,
    )

    return LoggingHandle(handler_id)


def _is_c45tree_record(record: Record) -> bool:
    """Keep records emitted by c45tree modules.

    Args:
        record (Record): The loguru Record object to filter.

    Returns:
        bool: True if the record comes from a c45tree module.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)

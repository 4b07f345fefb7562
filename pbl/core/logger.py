#!/usr/bin/env python3
# pbl/core/logger.py

"""
Leveled Logging
Appends every action and decision of one pbl invocation to the log file

Each record reads

    2026-10-17 09:12:44 <1> pbl-0412 run_action.88: message

i.e. timestamp, level (0 debug .. 3 error), session id, calling function
and line. Errors are mirrored to stderr unless the log file itself is the
console.
"""

import os
import sys
import random
import logging
from typing import Any, Optional

import yaml

from .. import __version__

LOG_FILE = "/var/log/pbl.log"
PROGRAM = "pbl"

BLOCK_START = "<" * 16
BLOCK_END = ">" * 16

LEVELS = {
    0: logging.DEBUG,
    1: logging.INFO,
    2: logging.WARNING,
    3: logging.ERROR,
}
_NUMBERS = {value: key for key, value in LEVELS.items()}

_logger = logging.getLogger("pbl")
_session: Optional[str] = None
_program: str = PROGRAM
_console_sink = False


class _SessionFilter(logging.Filter):
    """Adds session id, origin and pbl level number to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = _session or "-"
        record.origin = "main" if record.funcName in ("<module>", None) else record.funcName
        record.level_number = _NUMBERS.get(record.levelno, 0 if record.levelno < logging.INFO else 3)
        return True


class RecordFormatter(logging.Formatter):
    """Formats records as `timestamp <level> session origin.line: message`."""

    def __init__(self, prefix: str = "") -> None:
        super().__init__(
            fmt=prefix + "%(asctime)s <%(level_number)d> %(session)s %(origin)s.%(lineno)d: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def session_id() -> Optional[str]:
    return _session


def console_sink() -> bool:
    return _console_sink


def init(program: str = PROGRAM, log_file: Optional[str] = None) -> str:
    """
    Set up logging for this process.

    Only the first call has an effect; later calls return the existing
    session id. Failure to open the log file is not fatal: errors are still
    mirrored to stderr.

    Args:
        program: Program name, used for the session id and stderr prefix.
        log_file: File the records are appended to, default LOG_FILE.

    Returns:
        The session id.
    """
    global _session, _program, _console_sink

    if _session is not None:
        return _session

    if log_file is None:
        log_file = LOG_FILE

    _program = program
    _session = f"{program}-{random.randint(0, 9999):04d}"
    _console_sink = False

    _logger.setLevel(logging.DEBUG)
    session_filter = _SessionFilter()

    try:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    except OSError:
        file_handler = None

    if file_handler is not None:
        file_handler.setFormatter(RecordFormatter())
        file_handler.addFilter(session_filter)
        _logger.addHandler(file_handler)
        try:
            _console_sink = file_handler.stream.isatty()
        except (AttributeError, ValueError):
            _console_sink = False

    if not _console_sink:
        mirror = logging.StreamHandler(sys.stderr)
        mirror.setLevel(logging.ERROR)
        mirror.setFormatter(RecordFormatter(prefix=f"{program}: "))
        mirror.addFilter(session_filter)
        _logger.addHandler(mirror)

    _logger.info(_identity())

    return _session


def close() -> None:
    """Detach and close all handlers; the next `init()` starts a new session."""
    global _session, _console_sink

    for handler in list(_logger.handlers):
        _logger.removeHandler(handler)
        handler.close()
    _session = None
    _console_sink = False


def log(level: int, message: str, attachment: Any = None, max_depth: Optional[int] = None) -> None:
    """
    Write one record.

    Args:
        level: 0 (debug), 1 (info), 2 (warning) or 3 (error).
        message: The message text.
        attachment: Optional block appended below the message. Strings are
                    written as they are, anything else as a key-sorted YAML
                    dump.
        max_depth: Nesting levels of a structured attachment to show.
    """
    if _session is None:
        init()

    text = message
    if attachment is not None:
        text = f"{message}\n{format_block(attachment, max_depth)}"

    _logger.log(LEVELS.get(level, logging.ERROR if level > 3 else logging.DEBUG), text, stacklevel=2)


def format_block(attachment: Any, max_depth: Optional[int] = None) -> str:
    if isinstance(attachment, str):
        body = attachment
    else:
        body = yaml.safe_dump(
            _truncate(attachment, max_depth),
            sort_keys=True,
            default_flow_style=False,
            allow_unicode=True,
        )
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{BLOCK_START}\n{body}{BLOCK_END}"


def _truncate(value: Any, depth: Optional[int]) -> Any:
    """Reduce `value` to plain YAML types, cutting nesting below `depth`."""
    if isinstance(value, dict):
        if depth is not None and depth <= 0:
            return f"<dict of {len(value)}>"
        return {str(k): _truncate(v, None if depth is None else depth - 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        if depth is not None and depth <= 0:
            return f"<list of {len(value)}>"
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        return [_truncate(v, None if depth is None else depth - 1) for v in items]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


def _identity() -> str:
    device, chroot = _root_device()
    return f"{_program}-{__version__}, root = {device}{' (chroot)' if chroot else ''}"


def _root_device():
    """
    Best-effort name of the device mounted at `/`.

    Returns:
        Tuple of device name (or `major:minor`) and whether `/` differs
        from the root of process 1.
    """
    try:
        st = os.stat("/")
    except OSError:
        return "unknown", False

    major, minor = os.major(st.st_dev), os.minor(st.st_dev)
    device = f"{major}:{minor}"
    try:
        with open(f"/sys/dev/block/{major}:{minor}/uevent") as f:
            for line in f:
                if line.startswith("DEVNAME="):
                    device = "/dev/" + line.strip().split("=", 1)[1]
                    break
    except OSError:
        pass

    chroot = False
    try:
        init_root = os.stat("/proc/1/root/")
        chroot = (init_root.st_dev, init_root.st_ino) != (st.st_dev, st.st_ino)
    except OSError:
        pass

    return device, chroot

#!/usr/bin/env python3
# pbl/core/settings.py

"""
System Settings Reader
Reads sysconfig style KEY=value files into a flat namespace
"""

import os
import re
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

ENV_PREFIX = "SYS__"

_ASSIGNMENT = re.compile(r'^\s*([A-Z_][A-Z0-9_]*)=(.*?)\s*$')
_QUOTED = re.compile(r'^(["\'])(.*)\1$')


class Settings:
    """
    Flat namespace of settings read from sysconfig files.

    Keys are `<SOURCE>__<KEY>`, where SOURCE is the upper-cased name the
    source is loaded under, e.g. `BOOTLOADER__LOADER_TYPE` for `LOADER_TYPE`
    read from `/etc/sysconfig/bootloader`. Only lines of the form `KEY=value` are
    recognized; one pair of matching surrounding quotes is removed from the
    value. There is no escape handling.
    """

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}

    def load(self, name: str, source: Union[str, Path]) -> None:
        """
        Add all assignments found in `source` to the namespace.

        Keys are stored under `name`, e.g. `load("bootloader", path)` gives
        `BOOTLOADER__<KEY>` whatever the file is called.

        A missing or unreadable file is treated as empty. If a key appears
        more than once, the last value wins.
        """
        source = Path(source)
        prefix = name.upper()

        try:
            with source.open('r', errors='replace') as f:
                lines = f.readlines()
        except OSError:
            logger.debug(f"Settings source {source} not readable, ignored.")
            return

        for line in lines:
            match = _ASSIGNMENT.match(line)
            if not match:
                continue
            key, value = match.groups()
            quoted = _QUOTED.match(value)
            if quoted:
                value = quoted.group(2)
            self.values[f"{prefix}__{key}"] = value

    def get(self, source: str, key: str, default: str = "") -> str:
        return self.values.get(f"{source.upper()}__{key}", default)

    def set(self, source: str, key: str, value: str) -> None:
        self.values[f"{source.upper()}__{key}"] = value

    @property
    def loader_type(self) -> str:
        return self.get("bootloader", "LOADER_TYPE")

    @property
    def language(self) -> str:
        return self.get("language", "RC_LANG")

    def environment(self) -> Dict[str, str]:
        """Settings as `SYS__<SOURCE>__<KEY>` environment variables."""
        return {f"{ENV_PREFIX}{name}": value for name, value in self.values.items()}

    def child_environment(self, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Build the environment handed to backend scripts.

        Starts from `base` (default: the current process environment), adds
        the `SYS__*` variables and, when a language is configured, sets
        LANG to it and drops LC_MESSAGES and LC_ALL.
        """
        env = dict(os.environ if base is None else base)
        env.update(self.environment())

        if self.language:
            env['LANG'] = self.language
            env.pop('LC_MESSAGES', None)
            env.pop('LC_ALL', None)

        return env

#!/usr/bin/env python3
# pbl/core/backend.py

"""
Backend Resolver
Maps verbs to the scripts of the configured bootloader backend
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Union

from .actions import Verb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    path: Path


@dataclass(frozen=True)
class Missing:
    path: Path


ScriptLookup = Union[Found, Missing]


class BackendResolver:
    """
    Locates backend scripts below `<backend_root>/<loader>/`.

    A backend need not provide every verb; verbs without an executable
    script resolve to `Missing` and are skipped by the dispatcher.
    """

    def __init__(self, backend_root: Union[str, Path], loader: str):
        self.backend_root = Path(backend_root)
        self.loader = loader

    @property
    def backend_dir(self) -> Path:
        return self.backend_root / self.loader

    def exists(self) -> bool:
        """Whether a backend directory for the loader is installed."""
        return bool(self.loader) and self.backend_dir.is_dir()

    def script_for(self, verb: Verb) -> ScriptLookup:
        path = self.backend_dir / Verb(verb).value
        if path.is_file() and os.access(path, os.X_OK):
            return Found(path)
        logger.debug(f"No executable {path}")
        return Missing(path)

    def legacy_command(self, program: str) -> Path:
        """Path of the pre-backend executable for `program`."""
        return self.backend_root / f"{program}.old"

#!/usr/bin/env python3
# pbl/core/dispatcher.py

"""
Core Dispatcher
Ties settings, action queue, backend resolution and execution together
"""

import os
import sys
from typing import Iterable, Optional, Sequence

from tqdm import tqdm

from . import logger as pbl_log
from .actions import Action, Intent, build_queue
from .backend import BackendResolver, Found
from .config import PblConfig
from .executor import CommandExecutor
from .settings import Settings
from ..utils.command_builder import build_backend_command, build_legacy_command, format_command


class PblDispatcher:
    """
    Main dispatch engine.

    One instance handles one invocation: it reads the sysconfig settings,
    resolves the backend of the configured bootloader and runs the queued
    actions in order, or hands over to the legacy program if there is no
    such backend.
    """

    def __init__(self, config: PblConfig, program: str = "pbl",
                 argv: Sequence[str] = (), loader: Optional[str] = None):
        """
        Args:
            config: Dispatcher configuration (paths).
            program: Name the process was invoked as.
            argv: Original command line arguments, for the legacy program.
            loader: Bootloader overriding LOADER_TYPE from sysconfig.
        """
        self.config = config
        self.program = program
        self.argv = list(argv)

        pbl_log.init(program, config.log_file)
        pbl_log.log(1, f"{program} {format_command(self.argv)}".rstrip())

        self.settings = Settings()
        self.settings.load("bootloader", config.bootloader_settings)
        self.settings.load("language", config.language_settings)
        if loader is not None:
            self.settings.set("bootloader", "LOADER_TYPE", loader)
        pbl_log.log(0, "settings:", self.settings.values)

        self.loader = self.settings.loader_type
        self.resolver = BackendResolver(config.backend_root, self.loader)

    def show(self) -> int:
        """Print the configured bootloader."""
        print(self.loader)
        return 0

    def dispatch(self, intent: Intent) -> int:
        """
        Handle `intent` and return the process exit code.

        Does not return if the legacy program is executed.
        """
        if intent.show:
            return self.show()

        queue = build_queue(intent)
        pbl_log.log(0, "queue:", [[str(a.verb), a.argument] for a in queue])

        if not self.loader:
            pbl_log.log(1, "no bootloader configured")
            return 0

        if not self.resolver.exists():
            return self.exec_legacy()

        return self.execute_queue(queue, intent.passthrough)

    def execute_queue(self, queue: Iterable[Action], extra_args: Sequence[str] = ()) -> int:
        """
        Run every action of `queue` in order.

        A failing action does not stop the queue.

        Returns:
            The highest exit code of all actions, 0 if none failed.
        """
        executor = CommandExecutor(self.settings.child_environment())
        worst = 0

        for action in tqdm(list(queue), desc=self.loader, disable=None, leave=False, file=sys.stderr):
            lookup = self.resolver.script_for(action.verb)
            if not isinstance(lookup, Found):
                pbl_log.log(1, f"{self.loader}: {action.verb} skipped, no {lookup.path}")
                continue

            cmd = build_backend_command(lookup.path, action.arguments(), extra_args)
            result = executor.run(*cmd)
            worst = max(worst, result.exit_code)

        return worst

    def exec_legacy(self) -> int:
        """
        Replace this process with the legacy `<program>.old` program.

        Returns:
            1 if the legacy program could not be executed.
        """
        cmd = build_legacy_command(self.config.backend_root, self.program, self.argv)
        pbl_log.log(1, f"{self.resolver.backend_dir} missing, running {format_command(cmd)}")

        try:
            os.execve(cmd[0], cmd, self.settings.child_environment())
        except OSError as e:
            pbl_log.log(3, f"{cmd[0]}: {e.strerror or e}")
        return 1

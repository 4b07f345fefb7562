#!/usr/bin/env python3
# pbl/core/executor.py

"""
Command Executor
Runs backend scripts and collects their output and result
"""

import os
import tempfile
import subprocess
from dataclasses import dataclass
from typing import Dict, Optional

from . import logger as pbl_log
from ..utils.command_builder import format_command

# Backend scripts write their result to the file named here
RESULT_VARIABLE = "PBL_RESULT"


@dataclass(frozen=True)
class ExecutionResult:
    exit_code: int
    output: str
    result: Optional[str] = None


class CommandExecutor:
    """
    Runs one external command per call.

    Besides stdout/stderr (captured together and logged), a command can
    return a result: it writes it to the file named by $PBL_RESULT. The
    result is only looked at when the command exits with 0; it is then
    printed to our stdout. This is how e.g. `pbl --get-option` reports the
    option value.
    """

    def __init__(self, environment: Optional[Dict[str, str]] = None):
        self.environment = dict(os.environ if environment is None else environment)

    def run(self, command: str, *args: str) -> ExecutionResult:
        """
        Run `command` with `args` and wait for it.

        Args:
            command: Path of the executable.
            *args: Arguments passed unchanged.

        Returns:
            ExecutionResult with exit code, captured output and result text.
            A command that cannot be started has exit code 127.
        """
        cmd = [command] + list(args)
        cmdline = format_command(cmd)

        result_file = tempfile.NamedTemporaryFile(prefix="pbl.", delete=False)
        result_file.close()

        try:
            env = dict(self.environment)
            env[RESULT_VARIABLE] = result_file.name

            try:
                proc = subprocess.run(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    env=env,
                )
                exit_code = proc.returncode
                # Killed by a signal: report it the way a shell does
                if exit_code < 0:
                    exit_code = 128 - exit_code
                output = proc.stdout.decode('utf-8', errors='replace')
            except FileNotFoundError:
                exit_code = 127
                output = f"{command}: command not found\n"
            except OSError as e:
                exit_code = 127
                output = f"{command}: {e.strerror or e}\n"

            pbl_log.log(1 if exit_code == 0 else 3, f"'{cmdline}' = {exit_code}, output:", output)

            payload = None
            if exit_code == 0:
                payload = self._read_result(result_file.name)
                if payload:
                    if payload.endswith("\n"):
                        payload = payload[:-1]
                    print(payload, flush=True)
                    pbl_log.log(1, "result:", payload)

            return ExecutionResult(exit_code, output, payload or None)

        finally:
            try:
                os.unlink(result_file.name)
            except OSError:
                pass

    @staticmethod
    def _read_result(path: str) -> str:
        try:
            with open(path, 'r', errors='replace') as f:
                return f.read()
        except OSError as e:
            pbl_log.log(2, f"{path}: cannot read result: {e}")
            return ""

#!/usr/bin/env python3
# pbl/cli.py - Main entry point

"""
pbl - Bootloader Configuration Dispatcher
Purpose: Run bootloader specific backend scripts for install/config requests

Installed twice: as `pbl` and as `update-bootloader`. Under the second
name it only understands `--reinit` and passes everything else on.
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from . import __version__
from .core import logger as pbl_log
from .core.actions import Intent
from .core.config import ConfigError, PblConfig, LOG_FILE
from .core.dispatcher import PblDispatcher

PROGRAM = "pbl"
LEGACY_PROGRAM = "update-bootloader"


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that exits with 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: {message}\n")


def _primary_parser(program: str) -> argparse.ArgumentParser:
    parser = _Parser(
        prog=program,
        description="Configure/install boot loader.",
    )
    parser.add_argument("--install", action="store_true", help="Install boot loader.")
    parser.add_argument("--config", action="store_true", help="Create boot loader config.")
    parser.add_argument("--show", action="store_true", help="Print current boot loader.")
    parser.add_argument("--loader", metavar="BOOTLOADER",
                        help="Use BOOTLOADER instead of the configured boot loader.")
    parser.add_argument("--default", metavar="ENTRY", help="Set default boot entry to ENTRY.")
    parser.add_argument("--add-option", metavar="OPTION", help="Add OPTION to default boot options.")
    parser.add_argument("--del-option", metavar="OPTION", help="Delete OPTION from default boot options.")
    parser.add_argument("--get-option", metavar="OPTION", help="Get OPTION from default boot options.")
    parser.add_argument("--log", metavar="LOGFILE", default=None,
                        help=f"Log messages to LOGFILE (default: {LOG_FILE}).")
    parser.add_argument("--version", action="version", version=f"{program} {__version__}",
                        help="Show pbl version.")
    return parser


def _legacy_parser(program: str) -> argparse.ArgumentParser:
    parser = _Parser(
        prog=program,
        description="Update boot loader configuration. "
                    "Options not listed here are passed on to the boot loader scripts.",
        allow_abbrev=False,
    )
    parser.add_argument("--reinit", action="store_true",
                        help="Reinstall the boot loader before updating its config.")
    return parser


def parse_intent(program: str, argv: List[str]):
    """
    Parse `argv` according to the name the program runs under.

    Returns:
        Tuple of the Intent, the --log value and the --loader value.
    """
    if program == LEGACY_PROGRAM:
        args, rest = _legacy_parser(program).parse_known_args(argv)
        return Intent(legacy=True, reinit=args.reinit, passthrough=tuple(rest)), None, None

    args = _primary_parser(program).parse_args(argv)
    intent = Intent(
        install=args.install,
        config=args.config,
        show=args.show,
        default=args.default,
        add_option=args.add_option,
        del_option=args.del_option,
        get_option=args.get_option,
    )
    return intent, args.log, args.loader


def main(argv: Optional[List[str]] = None, program: Optional[str] = None) -> int:
    """Main entry point for pbl and update-bootloader"""
    if argv is None:
        argv = sys.argv[1:]
    if program is None:
        program = Path(sys.argv[0]).name
        if program == "__main__.py":
            program = PROGRAM

    intent, log_file, loader = parse_intent(program, argv)

    try:
        try:
            config = PblConfig()
        except ConfigError as e:
            # No usable config: log to --log or the default file
            pbl_log.init(program, log_file)
            pbl_log.log(3, str(e))
            return 1
        if log_file:
            config.set('log_file', log_file)

        dispatcher = PblDispatcher(config, program=program, argv=argv, loader=loader)
        exit_code = dispatcher.dispatch(intent)
        pbl_log.log(1, f"exit = {exit_code}")
        return exit_code
    finally:
        pbl_log.close()


if __name__ == "__main__":
    sys.exit(main())

from pathlib import Path
from typing import List, Optional, Sequence, Union


def build_backend_command(
    script: Union[str, Path],
    arguments: Optional[Sequence[str]] = None,
    extra_args: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Builds the argument list for one backend script call.

    Args:
        script: Path of the backend script, e.g. /usr/lib/bootloader/grub2/config.
        arguments: Arguments of the action (boot entry or option).
        extra_args: Further arguments passed through from the command line.

    Returns:
        A list of strings suitable for subprocess.
    """
    if not str(script):
        raise ValueError("Script path cannot be empty.")

    cmd = [str(script)]

    if arguments:
        cmd.extend(arguments)

    if extra_args:
        cmd.extend(extra_args)

    return cmd


def build_legacy_command(
    backend_root: Union[str, Path],
    program: str,
    argv: Sequence[str],
) -> List[str]:
    """
    Builds the exec argument list for the legacy `.old` program.

    Args:
        backend_root: Directory holding backends and legacy programs.
        program: Name the dispatcher was invoked as (pbl, update-bootloader).
        argv: Original command line arguments, without the program name.

    Returns:
        The legacy program path followed by the unchanged arguments.
    """
    if not program or "/" in program:
        raise ValueError(f"Invalid program name: {program!r}")

    return [str(Path(backend_root) / f"{program}.old")] + list(argv)


def format_command(cmd: Sequence[str]) -> str:
    """Command line as shown in the log."""
    return " ".join(cmd)

# Example usage:
#
# build_backend_command("/usr/lib/bootloader/grub2/get-option", ["quiet"])
# # ['/usr/lib/bootloader/grub2/get-option', 'quiet']
#
# build_legacy_command("/usr/lib/bootloader", "update-bootloader", ["--refresh"])
# # ['/usr/lib/bootloader/update-bootloader.old', '--refresh']

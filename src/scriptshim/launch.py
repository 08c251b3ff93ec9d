"""CLI entry point that re-executes itself as its bundled application script.

A launcher invoked as ``<dir>/<name>`` runs ``<dir>/lib/scripts/<name>.run``
with the same arguments, replacing the launcher process.
"""

from __future__ import annotations

import errno
import logging
import os
import sys
from typing import NoReturn, Sequence, Tuple

from scriptshim.utils import (
    FAILURE_EXIT_CODE,
    HAS_NATIVE_EXEC,
    SCRIPT_SUFFIX,
    SCRIPTS_SUBDIR,
    SHELL_PATH,
    configure_logging,
    spawn_and_wait,
)

log = logging.getLogger(__name__)


def split_invocation_path(path: str) -> Tuple[str, str]:
    """Split *path* into (dirname, basename) the way POSIX libgen does.

    Trailing slashes are ignored and a bare name lives in ``.``. A directory
    made only of slashes is ``/``, except that exactly two leading slashes
    stay ``//`` as glibc keeps them.
    """
    if not path:
        return ".", "."
    stripped = path.rstrip("/")
    if not stripped:
        return ("//" if len(path) == 2 else "/"), "/"
    head, sep, name = stripped.rpartition("/")
    if not sep:
        return ".", name
    directory = head.rstrip("/")
    if not directory:
        directory = "//" if len(head) == 1 else "/"
    return directory, name


def target_path(invocation_path: str) -> str:
    """Path of the application script for a launcher at *invocation_path*."""
    directory, name = split_invocation_path(invocation_path)
    return f"{directory}/{SCRIPTS_SUBDIR}/{name}{SCRIPT_SUFFIX}"


def forwarding_arguments(argv: Sequence[str], target: str) -> list[str]:
    """Argument vector for the script: *target* followed by argv[1:]."""
    return [target] + list(argv[1:])


def exec_script(cmd: str, cmd_line: Sequence[str]) -> NoReturn:
    """os.execvp, plus the libc fallback of running ``#!``-less scripts with sh."""
    try:
        os.execvp(cmd, cmd_line)
    except OSError as e:
        if e.errno != errno.ENOEXEC:
            raise
        log.debug("%s has no interpreter line, running it with %s", cmd, SHELL_PATH)
    os.execv(SHELL_PATH, [SHELL_PATH, cmd] + list(cmd_line[1:]))


def fail(msg: str) -> NoReturn:
    print(msg, file=sys.stderr)
    sys.exit(FAILURE_EXIT_CODE)


def run(argv: Sequence[str]) -> NoReturn:
    """Replace the current process with the script derived from argv[0]."""
    invocation_path = argv[0] if argv else ""

    try:
        cmd = target_path(invocation_path)
    except MemoryError:
        fail("Failed to allocate command name")
    try:
        cmd_line = forwarding_arguments(argv, cmd)
    except MemoryError:
        fail("Failed to allocate command line")

    log.debug("invoked as %r, running %s with %d argument(s)",
              invocation_path, cmd, len(cmd_line) - 1)

    try:
        if HAS_NATIVE_EXEC:
            exec_script(cmd, cmd_line)
        # No in-place exec here: wait for the script and hand back its status
        sys.exit(spawn_and_wait(cmd, cmd_line))
    except OSError as e:
        log.debug("exec failed: %s", e)
    fail(f'Failed to execute application script "{cmd}"')


def main():
    configure_logging()
    run(sys.argv)


if __name__ == "__main__":
    main()

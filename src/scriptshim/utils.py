"""Layout constants, debug logging and process helpers for scriptshim."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Sequence

# Configuration Constants
SCRIPTS_SUBDIR = "lib/scripts"
SCRIPT_SUFFIX = ".run"
FAILURE_EXIT_CODE = 2

# libc execvp runs scripts without an interpreter line with this shell
SHELL_PATH = "/bin/sh"

DEBUG_ENV_VAR = "SCRIPTSHIM_DEBUG"
LOG_FORMAT = "[scriptshim] %(message)s"

# Platforms where os.exec* cannot replace the running process in place
HAS_NATIVE_EXEC = os.name != "nt"

log = logging.getLogger(__name__)
logging.getLogger("scriptshim").addHandler(logging.NullHandler())


def debug_enabled(environ=None) -> bool:
    """Whether SCRIPTSHIM_DEBUG asks for diagnostic logging."""
    value = (environ if environ is not None else os.environ).get(DEBUG_ENV_VAR, "")
    return value not in ("", "0")


def configure_logging(environ=None) -> None:
    """Attach a stderr handler to the scriptshim loggers when debugging.

    Stays silent otherwise, so a failing launch writes a single line.
    """
    if not debug_enabled(environ):
        return
    root = logging.getLogger("scriptshim")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def spawn_and_wait(target: str, argv: Sequence[str]) -> int:
    """Run *target* as a child with *argv* and the current environment.

    Returns the child's exit status. Raises OSError when it cannot start.
    """
    log.debug("spawning %s as a child process", target)
    proc = subprocess.run(list(argv), executable=target)
    return proc.returncode

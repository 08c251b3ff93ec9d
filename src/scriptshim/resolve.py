"""Show which application script a launcher would run, without running it."""

from __future__ import annotations

import argparse
import json
import os
import stat
from dataclasses import asdict, dataclass

from scriptshim.launch import forwarding_arguments, target_path


@dataclass
class TargetStatus:
    path: str
    exists: bool = False
    executable: bool = False


def check_target(path: str) -> TargetStatus:
    """Report whether *path* is a regular file the current user may execute."""
    try:
        st = os.stat(path)
    except OSError:
        return TargetStatus(path)
    is_file = stat.S_ISREG(st.st_mode)
    return TargetStatus(path, exists=True, executable=is_file and os.access(path, os.X_OK))


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Resolve the application script a scriptshim launcher would execute",
    )
    parser.add_argument("invocation_path", help="Path the launcher is invoked as, e.g. /opt/app/bin/myapp")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments the launcher would forward")
    # Options must precede invocation_path; everything after it is forwarded
    parser.add_argument("--json", action="store_true", help="Print a single JSON object")
    args = parser.parse_args(argv)

    target = target_path(args.invocation_path)
    cmd_line = forwarding_arguments([args.invocation_path] + args.args, target)
    status = check_target(target)

    if args.json:
        info = asdict(status)
        info["target_path"] = info.pop("path")
        info.update(invocation_path=args.invocation_path, argv=cmd_line)
        print(json.dumps(info))
    else:
        print(f"target: {target}")
        print(f"argv:   {cmd_line}")
        if not status.exists:
            print("status: missing")
        elif not status.executable:
            print("status: not executable")
        else:
            print("status: ok")

    return 0 if status.executable else 1


if __name__ == "__main__":
    raise SystemExit(main())

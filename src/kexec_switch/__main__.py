"""Entry point: `kexec-switch` / `python -m kexec_switch`."""

import sys
from typing import List, Optional

from .cli import parse_args
from .errors import ScanError
from .executor import privilege_prefix, subprocess_executor
from .inspectors import run_all
from .privileged import PrivilegedExecutor
from .renderers import make_env
from .renderers.listing import render as render_listing
from .state import AppState


def _list(args) -> int:
    try:
        inventory = run_all(args.boot_dir, executor=subprocess_executor)
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(render_listing(inventory, make_env(), args.output))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.list:
        return _list(args)

    try:
        prefix = privilege_prefix(args.elevate)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    privileged = PrivilegedExecutor(subprocess_executor, prefix=prefix)
    state = AppState.from_boot_dir(args.boot_dir, privileged, cmdline_file=args.cmdline_file)

    from .tui import run as run_tui
    try:
        code = run_tui(state)
    except KeyboardInterrupt:
        return 130
    if state.last_error is not None and code != 0:
        print(f"Error: {state.last_error}", file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())

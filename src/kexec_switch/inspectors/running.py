"""Running kernel: active command line and release. File-based plus `uname -r`."""

import os
from pathlib import Path
from typing import Optional

from ..errors import ExecError
from ..executor import Executor

DEFAULT_CMDLINE_FILE = "/proc/cmdline"


def read_cmdline(path: Path = Path(DEFAULT_CMDLINE_FILE)) -> str:
    """Return the active kernel command line verbatim, minus the trailing newline.

    Decoded with the filesystem encoding (surrogateescape), so bytes that are
    not valid UTF-8 survive unchanged into the kexec argv.
    """
    try:
        return os.fsdecode(Path(path).read_bytes()).rstrip("\n")
    except OSError as e:
        raise ExecError("cmdline", None, f"Cannot read {path}: {e.strerror or e}")


def running_release(executor: Executor) -> Optional[str]:
    result = executor(["uname", "-r"])
    if result.returncode != 0:
        return None
    release = result.stdout.strip()
    return release or None

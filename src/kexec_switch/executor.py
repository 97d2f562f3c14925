"""
Command execution abstraction.

Nothing else in the package calls subprocess directly. Callers take an
executor so that tests can inject canned results instead of running
kexec, sudo or uname on the build host.
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Protocol


ELEVATORS = ("sudo", "pkexec", "doas")


@dataclass
class RunResult:
    """Result of running a command."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Protocol for command execution. Implementations may run commands or return fixtures."""

    def __call__(self, cmd: List[str]) -> RunResult:
        """Execute command. Returns stdout, stderr, returncode."""
        ...


def subprocess_executor(cmd: List[str]) -> RunResult:
    """Default implementation: run the command via subprocess and wait for it.

    No timeout: a successful ``kexec -e`` never returns here.
    """
    import subprocess
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            errors="replace",
        )
        return RunResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )
    except FileNotFoundError as e:
        return RunResult(stdout="", stderr=f"Command not found: {e.filename or cmd[0]}", returncode=127)
    except PermissionError as e:
        return RunResult(stdout="", stderr=f"Permission denied: {e.filename or cmd[0]}", returncode=126)
    except OSError as e:
        # e.g. ENOEXEC: the file exists but is not a runnable program
        return RunResult(stdout="", stderr=f"Cannot run {cmd[0]}: {e.strerror or e}", returncode=126)


def privilege_prefix(elevate: Optional[str] = None) -> List[str]:
    """Command prefix that runs the following argv as root.

    ``elevate`` is one of ELEVATORS, ``"none"``, or None for automatic:
    no prefix when already root, ``sudo`` otherwise.
    """
    if elevate == "none":
        return []
    if elevate is None:
        if os.geteuid() == 0:
            return []
        elevate = "sudo"
    if elevate not in ELEVATORS:
        raise ValueError(f"Unsupported elevation command: {elevate!r} (expected one of {', '.join(ELEVATORS)} or none)")
    return [elevate]


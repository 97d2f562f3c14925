"""
Privileged kexec boundary.

Two blocking steps, run strictly in sequence and never retried:

    load(entry, cmdline)  -> ExecuteToken     kexec -l <kernel> --initrd=<initrd> --command-line=<cmdline>
    execute(token)        -> never returns    kexec -e

``execute`` only accepts a token produced by a successful ``load`` of this
executor, and each token works once. AppState mints it from the
Confirmation-accept transition only.
"""

import os
import sys
from typing import List, NoReturn, Optional

from .errors import ExecError
from .executor import Executor, privilege_prefix, subprocess_executor
from .schema import KernelEntry

_DEBUG = bool(os.environ.get("KEXEC_SWITCH_DEBUG", ""))

_MINT = object()


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[kexec-switch] kexec: {msg}", file=sys.stderr)


class ExecuteToken:
    """Proof that a kernel is staged. Only PrivilegedExecutor.load creates these."""

    __slots__ = ("entry", "_owner", "_spent")

    def __init__(self, key: object, owner: "PrivilegedExecutor", entry: KernelEntry) -> None:
        if key is not _MINT:
            raise TypeError("ExecuteToken cannot be created directly")
        self.entry = entry
        self._owner = owner
        self._spent = False

    @property
    def spent(self) -> bool:
        return self._spent


def load_command(entry: KernelEntry, command_line: str) -> List[str]:
    return [
        "kexec",
        "-l",
        entry.kernel_path,
        f"--initrd={entry.initrd_path}",
        f"--command-line={command_line}",
    ]


EXECUTE_COMMAND = ["kexec", "-e"]


class PrivilegedExecutor:
    def __init__(
        self,
        executor: Optional[Executor] = None,
        prefix: Optional[List[str]] = None,
    ) -> None:
        self.executor = executor or subprocess_executor
        self.prefix = list(prefix) if prefix is not None else privilege_prefix()

    def _run(self, stage: str, argv: List[str]):
        cmd = self.prefix + argv
        _debug(f"{stage}: {cmd!r}")
        result = self.executor(cmd)
        if result.returncode != 0:
            _debug(f"{stage} exited {result.returncode}: {result.stderr.strip()}")
            raise ExecError(stage, result.returncode, result.stderr, cmd)
        return result

    def load(self, entry: KernelEntry, command_line: str) -> ExecuteToken:
        """Stage entry with command_line passed verbatim. Raises ExecError on non-zero exit."""
        self._run("load", load_command(entry, command_line))
        return ExecuteToken(_MINT, self, entry)

    def execute(self, token: ExecuteToken) -> NoReturn:
        """Jump into the staged kernel.

        On success the running system is replaced and this never returns.
        Any return is a failure and raises ExecError, including an exit
        status of 0 with the old kernel still running.
        """
        if not isinstance(token, ExecuteToken):
            raise TypeError("execute() requires the ExecuteToken returned by load()")
        if token._owner is not self:
            raise ValueError("ExecuteToken was issued by a different executor")
        if token.spent:
            raise ValueError("ExecuteToken already used")
        token._spent = True
        result = self._run("execute", list(EXECUTE_COMMAND))
        raise ExecError(
            "execute",
            result.returncode,
            result.stderr or "kexec -e returned without switching kernels",
            self.prefix + EXECUTE_COMMAND,
        )

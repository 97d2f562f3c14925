"""Error taxonomy: scan failures are fatal at startup, exec failures are recoverable."""

from typing import List, Optional


class ScanError(Exception):
    """The boot directory could not produce any selectable kernel."""


class DirectoryUnreadable(ScanError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read boot directory {path}: {reason}")


class NoKernelsFound(ScanError):
    def __init__(self, path: str, skipped: Optional[List[str]] = None) -> None:
        self.path = path
        self.skipped = list(skipped or [])
        msg = f"No bootable kernels found in {path} (need vmlinuz-<version> with a matching initrd)"
        if self.skipped:
            msg += f"; kernels without initrd: {', '.join(self.skipped)}"
        super().__init__(msg)


class ExecError(Exception):
    """A privileged step failed. Carries the exit status and stderr verbatim."""

    def __init__(
        self,
        stage: str,
        returncode: Optional[int],
        stderr: str,
        command: Optional[List[str]] = None,
    ) -> None:
        self.stage = stage
        self.returncode = returncode
        self.stderr = stderr
        self.command = list(command or [])
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.returncode is None:
            status = "did not run"
        elif self.returncode < 0:
            status = f"killed by signal {-self.returncode}"
        else:
            status = f"exit status {self.returncode}"
        if self.stage == "cmdline":
            head = "Cannot capture the running kernel command line"
        else:
            head = f"kexec {self.stage} failed ({status})"
        detail = self.stderr.rstrip()
        return f"{head}:\n{detail}" if detail else head

from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from kexec_switch.executor import RunResult


class RecordingExecutor:
    """Executor that records every command and answers from a table of canned results."""

    def __init__(self, results: Optional[dict] = None, release: str = "5.15.0") -> None:
        self.calls: List[List[str]] = []
        self.results = results or {}
        self.release = release

    def __call__(self, cmd):
        self.calls.append(list(cmd))
        if cmd == ["uname", "-r"]:
            return RunResult(stdout=self.release + "\n", stderr="", returncode=0)
        for marker, result in self.results.items():
            if marker in cmd:
                return result
        return RunResult(stdout="", stderr="", returncode=0)

    def kexec_calls(self) -> List[List[str]]:
        return [c for c in self.calls if "kexec" in c]


def make_boot_dir(root: Path, names: Iterable[str]) -> Path:
    boot = root / "boot"
    boot.mkdir(parents=True, exist_ok=True)
    for name in names:
        (boot / name).write_bytes(b"")
    return boot


@pytest.fixture
def boot_dir(tmp_path) -> Path:
    return make_boot_dir(tmp_path, [
        "vmlinuz-5.10.0",
        "initrd.img-5.10.0",
        "vmlinuz-5.15.0",
        "initramfs-5.15.0",
        "vmlinuz-6.0.0",
        "config-6.0.0",
    ])


@pytest.fixture
def cmdline_file(tmp_path) -> Path:
    p = tmp_path / "cmdline"
    p.write_text("BOOT_IMAGE=/vmlinuz-5.15.0 root=UUID=1234 ro quiet splash\n")
    return p

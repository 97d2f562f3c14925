"""
Inspectors read the local system and produce the Inventory AppState starts from.
Each inspector receives its path (and an executor where it runs commands).
"""

from pathlib import Path
from typing import Optional

from ..executor import Executor, subprocess_executor
from ..schema import Inventory

from .boot import scan_with_skipped
from .running import running_release


def run_all(
    boot_dir: Path,
    executor: Optional[Executor] = None,
) -> Inventory:
    """Scan boot_dir and look up the running release. ScanError propagates to the caller."""
    boot_dir = Path(boot_dir)
    if executor is None:
        executor = subprocess_executor
    entries, skipped = scan_with_skipped(boot_dir)
    return Inventory(
        boot_dir=str(boot_dir),
        entries=entries,
        running_release=running_release(executor),
        skipped=skipped,
    )

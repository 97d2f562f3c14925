"""Command-line arguments. Defaults can be overridden from the environment."""

import argparse
import os
from pathlib import Path
from typing import List, Optional

from .executor import ELEVATORS
from .inspectors.running import DEFAULT_CMDLINE_FILE


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="kexec-switch",
        description="Pick an installed kernel and switch into it with kexec, without a reboot.",
    )
    p.add_argument(
        "--boot-dir",
        type=Path,
        default=Path(os.environ.get("KEXEC_SWITCH_BOOT_DIR") or "/boot"),
        help="Directory holding vmlinuz-<version> and initrd images (default: /boot, env KEXEC_SWITCH_BOOT_DIR)",
    )
    p.add_argument(
        "--cmdline-file",
        type=Path,
        default=Path(DEFAULT_CMDLINE_FILE),
        help="File holding the command line forwarded to the new kernel (default: /proc/cmdline)",
    )
    p.add_argument(
        "--elevate",
        choices=[*ELEVATORS, "none"],
        default=os.environ.get("KEXEC_SWITCH_ELEVATE") or None,
        help="Command used to run kexec as root (default: sudo unless already root, env KEXEC_SWITCH_ELEVATE)",
    )
    p.add_argument(
        "--list",
        action="store_true",
        help="Print the kernels that can be switched to and exit",
    )
    p.add_argument(
        "-o", "--output",
        choices=["text", "json"],
        default="text",
        help="Format for --list",
    )
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)

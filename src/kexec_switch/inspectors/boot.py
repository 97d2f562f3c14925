"""Boot directory scanner: pair vmlinuz-<version> with its initrd, newest first. File-based, never reads image contents."""

import os
import re
import sys
from pathlib import Path
from typing import List, Optional, Set, Tuple

from ..errors import DirectoryUnreadable, NoKernelsFound
from ..schema import KernelEntry

_DEBUG = bool(os.environ.get("KEXEC_SWITCH_DEBUG", ""))

KERNEL_PREFIX = "vmlinuz-"

# Checked in order; the first existing name wins.
INITRD_PATTERNS = (
    "initrd.img-{version}",
    "initramfs-{version}",
    "initramfs-{version}.img",
    "initrd-{version}.img",
)


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[kexec-switch] boot: {msg}", file=sys.stderr)


# Chunk ranks: a pre-release marker sorts below the end of the label,
# which sorts below any further text, which sorts below a number.
_PRE_RELEASE = re.compile(r"^[-._~]?rc$", re.IGNORECASE)
_RANK_PRE, _RANK_END, _RANK_TEXT, _RANK_NUM = 0, 1, 2, 3


def version_key(version: str) -> Tuple:
    """Natural sort key: digit runs compare numerically, everything else as text.

    "5.15.0" > "5.10.0" > "5.9.12", and "6.1.0-13-amd64" > "6.1.0-9-amd64".
    Release candidates rank below their release: "5.15.0" > "5.15.0-rc2" > "5.15.0-rc1".
    The raw label is the last element so distinct labels never compare equal.
    """
    parts = []
    for chunk in re.split(r"(\d+)", version):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((_RANK_NUM, int(chunk), ""))
        elif _PRE_RELEASE.match(chunk):
            parts.append((_RANK_PRE, 0, chunk.lower()))
        else:
            parts.append((_RANK_TEXT, 0, chunk))
    parts.append((_RANK_END, 0, ""))
    return (tuple(parts), version)


def _list_names(boot_dir: Path) -> List[str]:
    try:
        with os.scandir(boot_dir) as it:
            return sorted(e.name for e in it if not e.is_dir(follow_symlinks=False))
    except FileNotFoundError:
        raise DirectoryUnreadable(str(boot_dir), "No such file or directory")
    except NotADirectoryError:
        raise DirectoryUnreadable(str(boot_dir), "Not a directory")
    except PermissionError:
        raise DirectoryUnreadable(str(boot_dir), "Permission denied")
    except OSError as e:
        raise DirectoryUnreadable(str(boot_dir), e.strerror or str(e))


def find_initrd(version: str, names: Set[str]) -> Optional[str]:
    for pattern in INITRD_PATTERNS:
        candidate = pattern.format(version=version)
        if candidate in names:
            return candidate
    return None


def resolve(boot_dir: Path, names: List[str]) -> Tuple[List[KernelEntry], List[str]]:
    """Pair kernels with initrds from a directory listing. Returns (entries newest first, skipped versions)."""
    available = set(names)
    entries: List[KernelEntry] = []
    skipped: List[str] = []
    seen: Set[str] = set()
    for name in sorted(names):
        if not name.startswith(KERNEL_PREFIX):
            continue
        version = name[len(KERNEL_PREFIX):]
        if not version:
            continue
        if version in seen:
            # First match wins; later duplicates are ignored.
            _debug(f"duplicate version {version} from {name}, ignored")
            continue
        initrd = find_initrd(version, available)
        if initrd is None:
            _debug(f"no initrd for {name}, skipped")
            skipped.append(version)
            continue
        seen.add(version)
        entries.append(
            KernelEntry(
                version=version,
                kernel_path=str(boot_dir / name),
                initrd_path=str(boot_dir / initrd),
            )
        )
    entries.sort(key=lambda e: version_key(e.version), reverse=True)
    return entries, skipped


def scan_with_skipped(boot_dir: Path) -> Tuple[Tuple[KernelEntry, ...], List[str]]:
    boot_dir = Path(boot_dir)
    names = _list_names(boot_dir)
    entries, skipped = resolve(boot_dir, names)
    _debug(f"{len(entries)} kernel(s) in {boot_dir}, {len(skipped)} without initrd")
    if not entries:
        raise NoKernelsFound(str(boot_dir), skipped)
    return tuple(entries), skipped


def scan(boot_dir: Path) -> Tuple[KernelEntry, ...]:
    """Resolve the kernel inventory of boot_dir.

    Raises DirectoryUnreadable when the directory cannot be listed and
    NoKernelsFound when it lists fine but holds no kernel with an initrd.
    """
    entries, _ = scan_with_skipped(boot_dir)
    return entries

"""
Tests for the boot directory scanner using tmp_path boot directories. No real /boot required.
"""

import os
from pathlib import Path

import pytest

from kexec_switch.errors import DirectoryUnreadable, NoKernelsFound, ScanError
from kexec_switch.inspectors import run_all
from kexec_switch.inspectors.boot import resolve, scan, scan_with_skipped, version_key

from conftest import RecordingExecutor, make_boot_dir


def test_scenario_two_pairs_and_stray_kernel(boot_dir):
    entries = scan(boot_dir)
    assert [e.version for e in entries] == ["5.15.0", "5.10.0"]
    assert entries[0].kernel_path == str(boot_dir / "vmlinuz-5.15.0")
    assert entries[0].initrd_path == str(boot_dir / "initramfs-5.15.0")
    assert entries[1].initrd_path == str(boot_dir / "initrd.img-5.10.0")
    assert "6.0.0" not in [e.version for e in entries]


def test_skipped_kernels_reported(boot_dir):
    _, skipped = scan_with_skipped(boot_dir)
    assert skipped == ["6.0.0"]


def test_kernel_without_initrd_never_listed():
    names = ["vmlinuz-1.0", "vmlinuz-2.0", "initrd.img-2.0", "initramfs-3.0", "vmlinuz-4.0", "initrd.img-4.0-extra"]
    entries, skipped = resolve(Path("/boot"), names)
    assert [e.version for e in entries] == ["2.0"]
    assert sorted(skipped) == ["1.0", "4.0"]


def test_initrd_match_is_exact_not_substring():
    names = ["vmlinuz-5.1", "initrd.img-5.10", "vmlinuz-5.10"]
    entries, skipped = resolve(Path("/boot"), names)
    assert [e.version for e in entries] == ["5.10"]
    assert skipped == ["5.1"]


def test_initrd_img_preferred_over_initramfs():
    names = ["vmlinuz-6.1.0", "initramfs-6.1.0", "initrd.img-6.1.0"]
    entries, _ = resolve(Path("/boot"), names)
    assert entries[0].initrd_path == "/boot/initrd.img-6.1.0"


def test_fedora_style_initramfs_img_accepted():
    names = ["vmlinuz-6.5.6-300.fc39.x86_64", "initramfs-6.5.6-300.fc39.x86_64.img"]
    entries, _ = resolve(Path("/boot"), names)
    assert len(entries) == 1
    assert entries[0].initrd_path == "/boot/initramfs-6.5.6-300.fc39.x86_64.img"


def test_bare_prefix_without_version_ignored():
    entries, skipped = resolve(Path("/boot"), ["vmlinuz-", "initrd.img-", "vmlinuz"])
    assert entries == []
    assert skipped == []


def test_no_duplicate_versions():
    names = ["vmlinuz-5.10.0", "initrd.img-5.10.0", "vmlinuz-5.10.0", "initramfs-5.10.0"]
    entries, _ = resolve(Path("/boot"), names)
    versions = [e.version for e in entries]
    assert versions == ["5.10.0"]
    assert len(versions) == len(set(versions))


def test_ordering_is_version_aware_newest_first():
    versions = ["5.9.12", "5.10.0", "6.1.0-9-amd64", "6.1.0-13-amd64", "4.19.0"]
    names = []
    for v in versions:
        names += [f"vmlinuz-{v}", f"initrd.img-{v}"]
    entries, _ = resolve(Path("/boot"), names)
    assert [e.version for e in entries] == [
        "6.1.0-13-amd64",
        "6.1.0-9-amd64",
        "5.10.0",
        "5.9.12",
        "4.19.0",
    ]


def test_ordering_stable_across_scans_and_listing_order():
    versions = ["5.4.0-150-generic", "5.15.0-91-generic", "6.2.0-39-generic"]
    names = []
    for v in versions:
        names += [f"vmlinuz-{v}", f"initrd.img-{v}"]
    first, _ = resolve(Path("/boot"), names)
    second, _ = resolve(Path("/boot"), list(reversed(names)))
    assert first == second


def test_version_key_distinct_labels_never_equal():
    assert version_key("5.10") != version_key("5.010")
    assert version_key("5.15.0") > version_key("5.10.0")


def test_release_candidates_rank_below_release():
    versions = ["5.14.0", "5.15.0-rc1", "5.15.0", "5.15.0-rc10", "5.15.0-rc2"]
    names = []
    for v in versions:
        names += [f"vmlinuz-{v}", f"initrd.img-{v}"]
    entries, _ = resolve(Path("/boot"), names)
    assert [e.version for e in entries] == ["5.15.0", "5.15.0-rc10", "5.15.0-rc2", "5.15.0-rc1", "5.14.0"]


def test_flavour_suffix_still_ranks_above_bare_release():
    assert version_key("6.1.0-13-amd64") > version_key("6.1.0-9-amd64")
    assert version_key("6.1.0-9-amd64") > version_key("6.1.0")
    assert version_key("6.1.0-rc3-amd64") < version_key("6.1.0-amd64")


def test_directory_missing(tmp_path):
    with pytest.raises(DirectoryUnreadable) as exc:
        scan(tmp_path / "nope")
    assert "No such file or directory" in str(exc.value)
    assert isinstance(exc.value, ScanError)


def test_not_a_directory(tmp_path):
    f = tmp_path / "file"
    f.write_text("")
    with pytest.raises(DirectoryUnreadable):
        scan(f)


@pytest.mark.skipif(os.geteuid() == 0, reason="root can read any directory")
def test_directory_permission_denied(tmp_path):
    boot = make_boot_dir(tmp_path, ["vmlinuz-5.10.0", "initrd.img-5.10.0"])
    boot.chmod(0)
    try:
        with pytest.raises(DirectoryUnreadable) as exc:
            scan(boot)
        assert "Permission denied" in str(exc.value)
    finally:
        boot.chmod(0o755)


def test_empty_directory_is_no_kernels_found(tmp_path):
    boot = make_boot_dir(tmp_path, ["config-5.10.0", "System.map-5.10.0"])
    with pytest.raises(NoKernelsFound) as exc:
        scan(boot)
    assert not isinstance(exc.value, DirectoryUnreadable)


def test_no_kernels_found_lists_skipped(tmp_path):
    boot = make_boot_dir(tmp_path, ["vmlinuz-6.0.0"])
    with pytest.raises(NoKernelsFound) as exc:
        scan(boot)
    assert exc.value.skipped == ["6.0.0"]
    assert "6.0.0" in str(exc.value)


def test_subdirectories_are_not_kernels(tmp_path):
    boot = make_boot_dir(tmp_path, ["initrd.img-1.0", "vmlinuz-2.0", "initrd.img-2.0"])
    (boot / "vmlinuz-1.0").mkdir()
    assert [e.version for e in scan(boot)] == ["2.0"]


def test_run_all_builds_inventory(boot_dir):
    executor = RecordingExecutor(release="5.10.0")
    inventory = run_all(boot_dir, executor=executor)
    assert inventory.boot_dir == str(boot_dir)
    assert [e.version for e in inventory.entries] == ["5.15.0", "5.10.0"]
    assert inventory.running_release == "5.10.0"
    assert inventory.skipped == ["6.0.0"]
    assert executor.kexec_calls() == []

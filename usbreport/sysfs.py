#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Location of the sysfs USB device tree"""

import functools
import logging
import pathlib

from .types import Iterator, NamedTuple, Optional

DEFAULT_MOUNT_PATH = pathlib.Path("/sys")
PROC_MOUNTS_PATH = pathlib.Path("/proc/mounts")

log = logging.getLogger(__name__)


class MountInfo(NamedTuple):
    device: str
    mount_point: pathlib.Path
    fs_type: str
    options: tuple[str, ...]


def iter_mounts(text: str) -> Iterator[MountInfo]:
    """Entries of a mount table in /proc/mounts format. Malformed lines are ignored"""
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 4:
            continue
        device, mount_point, fs_type, options = fields[:4]
        yield MountInfo(device, pathlib.Path(mount_point), fs_type, tuple(options.split(",")))


def find_mount_point(text: str, fs_type: str = "sysfs") -> Optional[pathlib.Path]:
    for mount in iter_mounts(text):
        if mount.fs_type == fs_type:
            return mount.mount_point
    return None


@functools.cache
def mount_path() -> pathlib.Path:
    """sysfs mount point as reported by /proc/mounts (/sys if not mounted or unknown)"""
    try:
        text = PROC_MOUNTS_PATH.read_text()
    except OSError as error:
        log.debug("could not read mount table (%s). Assuming %s", error, DEFAULT_MOUNT_PATH)
        return DEFAULT_MOUNT_PATH
    path = find_mount_point(text)
    return DEFAULT_MOUNT_PATH if path is None else path


def device_path() -> pathlib.Path:
    return mount_path() / "bus" / "usb" / "devices"


def is_available() -> bool:
    return device_path().is_dir()

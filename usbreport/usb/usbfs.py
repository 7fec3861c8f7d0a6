#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""USB devices as exposed by usbfs (/dev/bus/usb/BBB/DDD)"""

import functools

from .. import ioctl
from . import raw
from .base import USB_DEV_PATH, USB_DEV_TMPFS_PATH, BaseDevice
from .raw import Speed


class Device(BaseDevice):
    @functools.cached_property
    def bus_number(self) -> int:
        return int(self.filename.parent.name)

    @functools.cached_property
    def device_address(self) -> int:
        return int(self.filename.name)

    @functools.cached_property
    def speed(self) -> Speed:
        try:
            with self:
                code = ioctl.ioctl(self.fileno(), raw.IOC.GET_SPEED)
        except OSError as error:
            self.log.debug("could not get speed of %s: %s", self.filename, error)
            return Speed.UNKNOWN
        return raw.KERNEL_SPEED_MAP.get(code, Speed.UNKNOWN)

    def _read_descriptor_data(self) -> bytes:
        # just after the open() call the device file contains the device
        # descriptor followed by all configuration descriptors
        with self:
            return self.read()


@functools.cache
def usbfs_path():
    for path in (USB_DEV_TMPFS_PATH, USB_DEV_PATH):
        if path.is_dir():
            # assume if we find any files that it must be the right place
            if next(path.iterdir(), None):
                return path

    # On udev based systems without any usb-devices /dev/bus/usb will not
    # exist. So if we've not found anything and we're using udev for hotplug
    # simply assume /dev/bus/usb rather then making this fail
    return USB_DEV_TMPFS_PATH


def is_available() -> bool:
    return usbfs_path().is_dir()


def iter_paths():
    for path in sorted(usbfs_path().iterdir()):
        try:
            int(path.name)
        except ValueError:
            continue
        for sub_path in sorted(path.iterdir()):
            try:
                int(sub_path.name)
            except ValueError:
                continue
            yield sub_path


def iter_devices():
    for path in iter_paths():
        yield Device(path)

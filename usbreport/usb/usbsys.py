#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""USB devices as exposed by sysfs (/sys/bus/usb/devices)"""

import functools
import logging
import pathlib

from .. import sysfs
from ..util import parse_int_path
from .base import MAX_PORT_DEPTH, USB_DEV_TMPFS_PATH, BaseDevice
from .raw import Speed

log = logging.getLogger(__name__)

SPEED_MAP = {
    "1.5": Speed.LOW,
    "12": Speed.FULL,
    "480": Speed.HIGH,
    "5000": Speed.SUPER,
    "10000": Speed.SUPER_PLUS,
    "20000": Speed.SUPER_PLUS_X2,
}


def _attr_getter(filename, decode, alternative):
    def getter(self):
        path = self.syspath / filename
        try:
            with path.open() as fobj:
                return decode(fobj.read())
        except FileNotFoundError:
            if alternative is None:
                raise
            return alternative(self)

    return getter


def cached_attr(filename, decode=str.strip, alternative=None):
    return functools.cached_property(_attr_getter(filename, decode, alternative))


def attr(filename, decode=str.strip, alternative=None):
    return property(_attr_getter(filename, decode, alternative))


def _decode_speed(text: str) -> Speed:
    return SPEED_MAP.get(text.strip(), Speed.UNKNOWN)


def _decode_configuration(text: str) -> int:
    # empty when the device is not configured
    text = text.strip()
    return int(text) if text else 0


def port_numbers_from_name(name: str) -> tuple[int, ...]:
    """
    Port path encoded in the sysfs device name.

    Example: "1-2.4" (bus 1, root port 2, hub port 4) gives (2, 4).
    Root hubs ("usb1") have no port path and give ().
    """
    if "-" not in name:
        return ()
    _, path = name.split("-", 1)
    return parse_int_path(path)


class Device(BaseDevice):
    bus_number = cached_attr("busnum", int)
    device_address = cached_attr("devnum", int)
    speed = cached_attr("speed", _decode_speed, alternative=lambda _: Speed.UNKNOWN)
    active_configuration = attr("bConfigurationValue", _decode_configuration, alternative=lambda _: None)

    def __init__(self, syspath, **kwargs):
        self.syspath = pathlib.Path(syspath)
        dev_name = USB_DEV_TMPFS_PATH / f"{self.bus_number:03d}" / f"{self.device_address:03d}"
        super().__init__(dev_name, **kwargs)

    def __repr__(self):
        return f"{type(self).__name__}(bus={self.bus_number}, device={self.device_address}, syspath={self.syspath.name})"

    @functools.cached_property
    def port_numbers(self) -> tuple[int, ...]:
        try:
            ports = port_numbers_from_name(self.syspath.name)
        except ValueError:
            self.log.warning("unexpected sysfs name %r: no port path", self.syspath.name)
            return ()
        if len(ports) > MAX_PORT_DEPTH:
            self.log.warning("port path %s deeper than %d: ignored", ports, MAX_PORT_DEPTH)
            return ()
        return ports

    def _read_descriptor_data(self) -> bytes:
        return (self.syspath / "descriptors").read_bytes()


def is_available() -> bool:
    return sysfs.is_available()


def iter_paths():
    for path in sorted(sysfs.device_path().iterdir()):
        name = path.name
        if (not name[0].isdigit() and not name.startswith("usb")) or ":" in name:
            continue
        yield path


def iter_devices():
    for path in iter_paths():
        try:
            device = Device(path)
        except (OSError, ValueError) as error:
            # device unplugged (or not yet fully set up) while enumerating
            log.warning("skipping %s: %s", path.name, error)
            continue
        yield device

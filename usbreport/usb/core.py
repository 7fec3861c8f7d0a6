#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Access to the USB devices attached to the host.

A [`Context`][usbreport.usb.core.Context] selects the host interface and
hands out [`Snapshot`][usbreport.usb.core.Snapshot]s, each one a single
enumeration of the devices visible at that moment:

```python
with Context() as ctx:
    with ctx.snapshot() as devices:
        for dev in devices:
            print(dev.bus_number, dev.device_address)
```
"""

import logging

from ..device import ReentrantOpen
from ..types import Callable, Iterable, Optional
from . import usbfs, usbsys
from .base import BaseDevice, InitializationError, SnapshotError

log = logging.getLogger(__name__)


def select_backend():
    # we can retrieve device list and descriptors from sysfs or usbfs.
    # sysfs is preferable, because if we use usbfs we end up resuming
    # any autosuspended USB devices. however, sysfs is not available
    # everywhere, so we need a usbfs fallback too.
    if usbsys.is_available():
        return usbsys
    if usbfs.is_available():
        return usbfs
    raise InitializationError("neither sysfs nor usbfs USB device listing is available")


class Snapshot(ReentrantOpen):
    """
    Devices visible at one enumeration, owned as a single unit.

    The device list is built when the snapshot is acquired (first `with`
    level) and released on exit of the outermost `with`. A released
    snapshot cannot be used or acquired again.
    """

    def __init__(self, iter_devices: Callable[[], Iterable[BaseDevice]]):
        super().__init__()
        self._iter_devices = iter_devices
        self._devices: Optional[tuple[BaseDevice, ...]] = None
        self.released = False

    def __repr__(self):
        if self._devices is None:
            state = "released" if self.released else "not acquired"
        else:
            state = f"{len(self._devices)} devices"
        return f"<{type(self).__name__} {state}>"

    def open(self):
        if self.released:
            raise SnapshotError("snapshot already released")
        log.info("acquiring device list")
        self._devices = tuple(self._iter_devices())
        log.info("acquired %d devices", len(self._devices))

    def close(self):
        devices, self._devices = self._devices, None
        self.released = True
        for dev in devices or ():
            try:
                dev.close()
            except OSError as error:
                log.error("could not close %r: %s", dev, error)
        log.info("released device list")

    @property
    def devices(self) -> tuple[BaseDevice, ...]:
        if self._devices is None:
            raise SnapshotError("snapshot not acquired" if not self.released else "snapshot already released")
        return self._devices

    def __len__(self):
        return len(self.devices)

    def __iter__(self):
        return iter(self.devices)

    def __getitem__(self, index):
        return self.devices[index]


class Context(ReentrantOpen):
    """Host interface session. Opening it selects the enumeration backend"""

    def __init__(self):
        super().__init__()
        self.backend = None

    def open(self):
        self.backend = select_backend()
        log.info("using %s backend", self.backend.__name__.rsplit(".", 1)[-1])

    def close(self):
        self.backend = None

    def snapshot(self) -> Snapshot:
        if self.backend is None:
            raise InitializationError("context not initialized")
        return Snapshot(self.backend.iter_devices)

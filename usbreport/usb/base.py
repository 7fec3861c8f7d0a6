#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import functools
import pathlib

from .. import device
from ..types import Optional
from .descriptor import Configuration, DeviceDescriptor, build_descriptor, endpoint_max_packet_size, find_endpoint
from .raw import Speed

USB_DEV_PATH = pathlib.Path("/dev")
USB_DEV_TMPFS_PATH = USB_DEV_PATH / "bus" / "usb"

# depth limit is 7 as of USB 3.0
MAX_PORT_DEPTH = 7


class USBError(Exception):
    """Base class for all errors raised by usbreport"""


class InitializationError(USBError):
    """No usable host interface (neither sysfs nor usbfs) could be found"""


class SnapshotError(USBError):
    """Snapshot used outside of its acquire/release scope"""


class DescriptorReadError(USBError):
    """The device descriptor could not be retrieved"""


class PacketSizeUnavailable(USBError):
    """The max packet size of an endpoint could not be determined"""


class EndpointNotFoundError(PacketSizeUnavailable):
    """The endpoint does not exist in the active configuration"""


class PacketSizeReadError(PacketSizeUnavailable):
    """The active configuration could not be determined"""


class BaseDevice(device.DeviceFile):
    """
    A USB device as seen in one enumeration.

    Concrete sub-classes must provide bus_number, device_address and
    _read_descriptor_data(). speed, port_numbers and active_configuration
    fall back to "unknown" values.
    """

    def __repr__(self):
        return f"{type(self).__name__}(bus={self.bus_number}, address={self.device_address})"

    @property
    def bus_number(self) -> int:
        raise NotImplementedError

    @property
    def device_address(self) -> int:
        raise NotImplementedError

    @property
    def speed(self) -> Speed:
        return Speed.UNKNOWN

    @property
    def port_numbers(self) -> tuple[int, ...]:
        return ()

    @property
    def active_configuration(self) -> Optional[int]:
        return None

    def _read_descriptor_data(self) -> bytes:
        raise NotImplementedError

    @functools.cached_property
    def descriptor(self) -> DeviceDescriptor:
        try:
            data = self._read_descriptor_data()
            return build_descriptor(data)
        except (OSError, ValueError) as error:
            raise DescriptorReadError(f"{self!r}: {error}") from error

    def read_descriptor(self) -> DeviceDescriptor:
        """
        Device descriptor (with the configuration tree underneath).
        Raises DescriptorReadError if it cannot be retrieved or decoded.
        """
        return self.descriptor

    def active_config_descriptor(self) -> Configuration:
        configs = self.read_descriptor().configurations
        if not configs:
            raise LookupError("device has no configuration")
        active = self.active_configuration
        if active is None:
            return configs[0]
        for config in configs:
            if config.value == active:
                return config
        raise LookupError(f"active configuration {active} not found")

    def max_iso_packet_size(self, endpoint: int) -> int:
        """
        Maximum packet size the endpoint can send/receive in one service interval.

        Raises PacketSizeReadError if the active configuration is unavailable
        and EndpointNotFoundError if it has no such endpoint.
        """
        try:
            config = self.active_config_descriptor()
        except (DescriptorReadError, LookupError) as error:
            raise PacketSizeReadError(f"{self!r}: could not retrieve active configuration ({error})") from error
        ep = find_endpoint(config, endpoint)
        if ep is None:
            raise EndpointNotFoundError(f"{self!r}: endpoint 0x{endpoint:02X} not found")
        return endpoint_max_packet_size(ep, self.speed)

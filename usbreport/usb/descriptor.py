#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
Decoding of raw USB descriptors (as found in sysfs `descriptors` files and
usbfs device files) into a tree of ctypes structures:

```
DeviceDescriptor
  Configuration
    Interface
      Endpoint
        EndpointCompanion
```
"""

import ctypes
import logging

from usbreport.types import Iterator, Optional

from . import raw
from .raw import DescriptorType, Speed

log = logging.getLogger(__name__)

MAX_PACKET_SIZE_MASK = 0x07FF
TRANSACTIONS_SHIFT = 11
TRANSACTIONS_MASK = 0b11


def descriptor_node(klass):
    klass._children = None
    klass._parent = None

    def get_parent(self):
        return self._parent

    def set_parent(self, parent):
        self._parent = parent

    def get_children(self):
        if self._children is None:
            self._children = []
        return self._children

    def getitem(self, key):
        return self.children[key]

    def size(self):
        return len(self.children)

    def iterator(self):
        return iter(self.children)

    def get_type(self):
        try:
            return DescriptorType(self.bDescriptorType)
        except ValueError:
            return self.bDescriptorType

    klass.parent = property(get_parent, set_parent)
    klass.children = property(get_children)
    klass.type = property(get_type)
    klass.length = property(lambda self: self.bLength)
    klass.__getitem__ = getitem
    klass.__iter__ = iterator
    klass.__len__ = size
    return klass


@descriptor_node
class DeviceDescriptor(raw.usb_device_descriptor):
    @property
    def class_id(self) -> int:
        return self.bDeviceClass

    @property
    def subclass_id(self) -> int:
        return self.bDeviceSubClass

    @property
    def protocol_id(self) -> int:
        return self.bDeviceProtocol

    @property
    def vendor_id(self) -> int:
        return self.idVendor

    @property
    def product_id(self) -> int:
        return self.idProduct

    @property
    def nb_configurations(self) -> int:
        return self.bNumConfigurations

    @property
    def configurations(self) -> list["Configuration"]:
        return [child for child in self.children if isinstance(child, Configuration)]


@descriptor_node
class Configuration(raw.usb_config_descriptor):
    @property
    def value(self) -> int:
        return self.bConfigurationValue


@descriptor_node
class Interface(raw.usb_interface_descriptor):
    @property
    def number(self) -> int:
        return self.bInterfaceNumber


@descriptor_node
class Endpoint(raw.usb_endpoint_descriptor):
    DIRECTION_MASK = 0x80
    TRANSFER_TYPE_MASK = 0b11

    @property
    def address(self) -> int:
        return self.bEndpointAddress

    @property
    def direction(self) -> raw.Direction:
        return raw.Direction(self.address & self.DIRECTION_MASK)

    @property
    def transfer_type(self) -> raw.EndpointTransferType:
        return raw.EndpointTransferType(self.bmAttributes & self.TRANSFER_TYPE_MASK)

    @property
    def companion(self) -> Optional["EndpointCompanion"]:
        return next((child for child in self.children if isinstance(child, EndpointCompanion)), None)

    def __repr__(self):
        name = type(self).__name__
        return f"{name} address=0x{self.address:X} type={self.transfer_type.name} direction={self.direction.name}"


@descriptor_node
class EndpointCompanion(raw.usb_ss_ep_comp_descriptor):
    @property
    def bytes_per_interval(self) -> int:
        return self.wBytesPerInterval


DESCRIPTOR_HIERARCHY = {
    DescriptorType.DEVICE: None,
    DescriptorType.CONFIG: DescriptorType.DEVICE,
    DescriptorType.INTERFACE: DescriptorType.CONFIG,
    DescriptorType.ENDPOINT: DescriptorType.INTERFACE,
    DescriptorType.SS_ENDPOINT_COMPANION: DescriptorType.ENDPOINT,
}


DESCRIPTOR_STRUCT_MAP = {
    DescriptorType.DEVICE: DeviceDescriptor,
    DescriptorType.CONFIG: Configuration,
    DescriptorType.INTERFACE: Interface,
    DescriptorType.ENDPOINT: Endpoint,
    DescriptorType.SS_ENDPOINT_COMPANION: EndpointCompanion,
}


def _iter_decode_descriptors(data: bytes) -> Iterator:
    offset, size = 0, len(data)
    while offset < size:
        if size - offset < 2:
            raise ValueError(f"truncated descriptor at offset {offset}")
        length, dtype = data[offset], data[offset + 1]
        if length < 2:
            raise ValueError(f"invalid descriptor length {length} at offset {offset}")
        dclass = DESCRIPTOR_STRUCT_MAP.get(dtype)
        if dclass is None:
            log.debug("skipping descriptor type 0x%02X (%d bytes)", dtype, length)
        else:
            local = data[offset : offset + length]
            extra = ctypes.sizeof(dclass) - len(local)
            if extra > 0:
                local += extra * b"\x00"
            yield dclass.from_buffer_copy(local)
        offset += length


def iter_descriptors(data: bytes) -> Iterator:
    """Decode the known descriptors in data, linking each one to its parent"""
    last_type = {}
    for item in _iter_decode_descriptors(data):
        dtype = item.bDescriptorType
        last_type[dtype] = item
        parent_type = DESCRIPTOR_HIERARCHY[dtype]
        if parent_type is not None:
            parent = last_type.get(parent_type)
            if parent is not None:
                parent.children.append(item)
                item.parent = parent
        yield item


def build_descriptor(data: bytes) -> DeviceDescriptor:
    """
    Decode raw descriptor bytes (device descriptor followed by the
    configuration descriptors) and return the root device descriptor.

    Raises ValueError if the data does not start with a device descriptor.
    """
    descriptors = iter_descriptors(data)
    root = next(descriptors, None)
    if not isinstance(root, DeviceDescriptor):
        raise ValueError("data does not start with a device descriptor")
    # consume the rest so the tree gets fully built
    for _ in descriptors:
        pass
    return root


def find_endpoint(config: Configuration, address: int) -> Optional[Endpoint]:
    for interface in config:
        for endpoint in interface:
            if isinstance(endpoint, Endpoint) and endpoint.address == address:
                return endpoint
    return None


def endpoint_max_packet_size(endpoint: Endpoint, speed: Speed = Speed.UNKNOWN) -> int:
    """
    Maximum amount of data the endpoint can transfer in a single (micro)frame.

    At SuperSpeed and above this comes from the endpoint companion. Otherwise
    it is the max packet size times the number of transactions per
    microframe (for isochronous and interrupt endpoints).
    """
    if speed >= Speed.SUPER:
        companion = endpoint.companion
        if companion is not None:
            return companion.bytes_per_interval
    value = endpoint.wMaxPacketSize
    result = value & MAX_PACKET_SIZE_MASK
    if endpoint.transfer_type in {raw.EndpointTransferType.ISOCHRONOUS, raw.EndpointTransferType.INTERRUPT}:
        result *= 1 + ((value >> TRANSACTIONS_SHIFT) & TRANSACTIONS_MASK)
    return result

#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import struct

import pytest

from usbreport import sysfs
from usbreport.usb import usbfs
from usbreport.usb.base import DescriptorReadError, EndpointNotFoundError
from usbreport.usb.descriptor import build_descriptor
from usbreport.usb.raw import Speed


def device_descriptor(
    bcd_usb=0x0200,
    klass=0,
    subclass=0,
    protocol=0,
    max_packet_size=64,
    vendor_id=0x0403,
    product_id=0x6015,
    bcd_device=0x1000,
    manufacturer=1,
    product=2,
    serial_number=3,
    nb_configs=1,
    descriptor_type=0x01,
):
    return struct.pack(
        "<BBHBBBBHHHBBBB",
        18,
        descriptor_type,
        bcd_usb,
        klass,
        subclass,
        protocol,
        max_packet_size,
        vendor_id,
        product_id,
        bcd_device,
        manufacturer,
        product,
        serial_number,
        nb_configs,
    )


def config_descriptor(value=1, nb_interfaces=1, attributes=0x80, max_power=50):
    return struct.pack("<BBHBBBBB", 9, 0x02, 0, nb_interfaces, value, 0, attributes, max_power)


def interface_descriptor(number=0, alternate_setting=0, nb_endpoints=1, klass=0xFF):
    return struct.pack("<BBBBBBBBB", 9, 0x04, number, alternate_setting, nb_endpoints, klass, 0, 0, 0)


def endpoint_descriptor(address=0x81, attributes=0x01, max_packet_size=512, interval=1):
    return struct.pack("<BBBBHB", 7, 0x05, address, attributes, max_packet_size, interval)


def companion_descriptor(max_burst=0, attributes=0, bytes_per_interval=1024):
    return struct.pack("<BBBBH", 6, 0x30, max_burst, attributes, bytes_per_interval)


def iso_device_data(**kwargs):
    """device with one configuration holding an isochronous IN endpoint 0x81"""
    return (
        device_descriptor(**kwargs)
        + config_descriptor()
        + interface_descriptor()
        + endpoint_descriptor(address=0x81, attributes=0x01, max_packet_size=0x0400)
    )


def make_sysfs_device(root, name, bus, address, data, speed="480", configuration="1"):
    path = root / name
    path.mkdir()
    (path / "busnum").write_text(f"{bus}\n")
    (path / "devnum").write_text(f"{address}\n")
    (path / "speed").write_text(f"{speed}\n")
    (path / "bConfigurationValue").write_text(f"{configuration}\n")
    (path / "descriptors").write_bytes(data)
    return path


def make_usbfs_device(root, bus, address, data):
    path = root / f"{bus:03d}"
    path.mkdir(exist_ok=True)
    filename = path / f"{address:03d}"
    filename.write_bytes(data)
    return filename


class FakeDevice:
    """In-memory device handle, as produced by a snapshot"""

    def __init__(
        self,
        bus=1,
        address=1,
        ports=(),
        speed=Speed.HIGH,
        data=None,
        packet_size=EndpointNotFoundError("endpoint 0x00 not found"),
        close_error=None,
    ):
        self.bus_number = bus
        self.device_address = address
        self.port_numbers = tuple(ports)
        self.speed = speed
        self.data = device_descriptor() if data is None else data
        self.packet_size = packet_size
        self.closed = True
        self.close_calls = 0
        self.close_error = close_error

    def read_descriptor(self):
        if isinstance(self.data, Exception):
            raise self.data
        return build_descriptor(self.data)

    def max_iso_packet_size(self, endpoint):
        if isinstance(self.packet_size, Exception):
            raise self.packet_size
        return self.packet_size

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error


def broken_device(bus=1, address=1):
    return FakeDevice(bus=bus, address=address, data=DescriptorReadError("I/O error"))


@pytest.fixture
def sysfs_root(tmp_path, monkeypatch):
    root = tmp_path / "sys" / "bus" / "usb" / "devices"
    root.mkdir(parents=True)
    monkeypatch.setattr(sysfs, "device_path", lambda: root)
    return root


@pytest.fixture
def usbfs_root(tmp_path, monkeypatch):
    root = tmp_path / "dev" / "bus" / "usb"
    root.mkdir(parents=True)
    monkeypatch.setattr(usbfs, "usbfs_path", lambda: root)
    return root

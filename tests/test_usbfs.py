#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

from unittest import mock

import pytest
from conftest import device_descriptor, iso_device_data, make_usbfs_device

from usbreport.usb import usbfs
from usbreport.usb.base import DescriptorReadError, EndpointNotFoundError
from usbreport.usb.raw import IOC, Speed, UsbDeviceSpeed


def test_iter_paths(usbfs_root):
    make_usbfs_device(usbfs_root, 1, 1, device_descriptor())
    make_usbfs_device(usbfs_root, 1, 7, device_descriptor())
    make_usbfs_device(usbfs_root, 2, 1, device_descriptor())
    (usbfs_root / "devices").write_text("")
    (usbfs_root / "001" / "garbage").write_text("")
    names = [(path.parent.name, path.name) for path in usbfs.iter_paths()]
    assert names == [("001", "001"), ("001", "007"), ("002", "001")]
    assert usbfs.is_available()


def test_device(usbfs_root):
    filename = make_usbfs_device(usbfs_root, 3, 12, iso_device_data(vendor_id=0x046D, product_id=0xC52B))
    dev = usbfs.Device(filename)
    assert dev.bus_number == 3
    assert dev.device_address == 12
    assert dev.port_numbers == ()
    assert dev.active_configuration is None
    desc = dev.read_descriptor()
    assert desc.vendor_id == 0x046D
    assert desc.product_id == 0xC52B
    # file only open while reading
    assert dev.closed
    assert dev.max_iso_packet_size(0x81) == 1024
    with pytest.raises(EndpointNotFoundError):
        dev.max_iso_packet_size(0)


def test_descriptor_read_error(usbfs_root):
    filename = make_usbfs_device(usbfs_root, 1, 2, device_descriptor())
    dev = usbfs.Device(filename)
    filename.unlink()
    with pytest.raises(DescriptorReadError):
        dev.read_descriptor()
    assert dev.closed


def test_speed_not_supported(usbfs_root):
    # a regular file does not support the usbfs ioctl
    filename = make_usbfs_device(usbfs_root, 1, 2, device_descriptor())
    dev = usbfs.Device(filename)
    assert dev.speed == Speed.UNKNOWN
    assert dev.closed


@pytest.mark.parametrize(
    "code, expected",
    [
        (UsbDeviceSpeed.LOW, Speed.LOW),
        (UsbDeviceSpeed.FULL, Speed.FULL),
        (UsbDeviceSpeed.HIGH, Speed.HIGH),
        (UsbDeviceSpeed.SUPER, Speed.SUPER),
        (UsbDeviceSpeed.SUPER_PLUS, Speed.SUPER_PLUS),
        (99, Speed.UNKNOWN),
    ],
)
def test_speed(usbfs_root, code, expected):
    filename = make_usbfs_device(usbfs_root, 1, 2, device_descriptor())
    dev = usbfs.Device(filename)
    with mock.patch("usbreport.usb.usbfs.ioctl.ioctl", return_value=code) as ioctl:
        assert dev.speed == expected
    ioctl.assert_called_once()
    assert ioctl.call_args.args[1] == IOC.GET_SPEED

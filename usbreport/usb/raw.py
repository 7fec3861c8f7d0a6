#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

# Constants and structures from linux/usb/ch9.h and linux/usbdevice_fs.h

import ctypes
import enum

from usbreport.ioctl import IO

u8 = ctypes.c_uint8
u16 = ctypes.c_uint16


class Struct(ctypes.Structure):
    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)}" for name, _ in self._fields_)
        return f"{type(self).__name__}({fields})"


class Speed(enum.IntEnum):
    """Negotiated device speed (same codes as libusb_speed)"""

    UNKNOWN = 0
    LOW = 1
    FULL = 2
    HIGH = 3
    SUPER = 4
    SUPER_PLUS = 5
    SUPER_PLUS_X2 = 6


class UsbDeviceSpeed(enum.IntEnum):
    """enum usb_device_speed as returned by the kernel"""

    UNKNOWN = 0
    LOW = 1
    FULL = 2
    HIGH = 3
    WIRELESS = 4
    SUPER = 5
    SUPER_PLUS = 6


KERNEL_SPEED_MAP = {
    UsbDeviceSpeed.UNKNOWN: Speed.UNKNOWN,
    UsbDeviceSpeed.LOW: Speed.LOW,
    UsbDeviceSpeed.FULL: Speed.FULL,
    UsbDeviceSpeed.HIGH: Speed.HIGH,
    UsbDeviceSpeed.WIRELESS: Speed.HIGH,
    UsbDeviceSpeed.SUPER: Speed.SUPER,
    UsbDeviceSpeed.SUPER_PLUS: Speed.SUPER_PLUS,
}


class Class(enum.IntEnum):
    """USB-IF device class codes"""

    PER_INTERFACE = 0x00
    AUDIO = 0x01
    COMM = 0x02
    HID = 0x03
    PHYSICAL = 0x05
    IMAGE = 0x06
    PRINTER = 0x07
    MASS_STORAGE = 0x08
    HUB = 0x09
    DATA = 0x0A
    SMART_CARD = 0x0B
    CONTENT_SECURITY = 0x0D
    VIDEO = 0x0E
    PERSONAL_HEALTHCARE = 0x0F
    DIAGNOSTIC_DEVICE = 0xDC
    WIRELESS = 0xE0
    MISCELLANEOUS = 0xEF
    APPLICATION = 0xFE
    VENDOR_SPEC = 0xFF


class DescriptorType(enum.IntEnum):
    DEVICE = 0x1
    CONFIG = 0x2
    STRING = 0x3
    INTERFACE = 0x4
    ENDPOINT = 0x5
    INTERFACE_ASSOCIATION = 0x0B
    BOS = 0x0F
    DEVICE_CAPABILITY = 0x10
    HID = 0x21
    REPORT = 0x22
    PHYSICAL = 0x23
    VIDEO_CONTROL = 0x24
    HUB = 0x29
    SUPERSPEED_HUB = 0x2A
    SS_ENDPOINT_COMPANION = 0x30


class Direction(enum.IntEnum):
    OUT = 0x00
    IN = 0x80


class EndpointTransferType(enum.IntEnum):
    CONTROL = 0x0
    ISOCHRONOUS = 0x1
    BULK = 0x2
    INTERRUPT = 0x3


class usb_device_descriptor(Struct):
    _fields_ = [
        ("bLength", u8),
        ("bDescriptorType", u8),
        ("bcdUSB", u16),
        ("bDeviceClass", u8),
        ("bDeviceSubClass", u8),
        ("bDeviceProtocol", u8),
        ("bMaxPacketSize0", u8),
        ("idVendor", u16),
        ("idProduct", u16),
        ("bcdDevice", u16),
        ("iManufacturer", u8),
        ("iProduct", u8),
        ("iSerialNumber", u8),
        ("bNumConfigurations", u8),
    ]


class usb_config_descriptor(Struct):
    _fields_ = [
        ("bLength", u8),
        ("bDescriptorType", u8),
        ("wTotalLength", u16),
        ("bNumInterfaces", u8),
        ("bConfigurationValue", u8),
        ("iConfiguration", u8),
        ("bmAttributes", u8),
        ("bMaxPower", u8),
    ]


class usb_interface_descriptor(Struct):
    _fields_ = [
        ("bLength", u8),
        ("bDescriptorType", u8),
        ("bInterfaceNumber", u8),
        ("bAlternateSetting", u8),
        ("bNumEndpoints", u8),
        ("bInterfaceClass", u8),
        ("bInterfaceSubClass", u8),
        ("bInterfaceProtocol", u8),
        ("iInterface", u8),
    ]


class usb_endpoint_descriptor(Struct):
    _fields_ = [
        ("bLength", u8),
        ("bDescriptorType", u8),
        ("bEndpointAddress", u8),
        ("bmAttributes", u8),
        ("wMaxPacketSize", u16),
        ("bInterval", u8),
    ]


class usb_ss_ep_comp_descriptor(Struct):
    _fields_ = [
        ("bLength", u8),
        ("bDescriptorType", u8),
        ("bMaxBurst", u8),
        ("bmAttributes", u8),
        ("wBytesPerInterval", u16),
    ]


class IOC(enum.IntEnum):
    GET_SPEED = IO("U", 31)

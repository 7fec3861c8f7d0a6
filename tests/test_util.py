#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import ctypes

import pytest

from usbreport.ioctl import IO, IOC, NONE
from usbreport.usb.raw import IOC as USBIOC
from usbreport.util import parse_int_path


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", ()),
        ("2", (2,)),
        ("2.4", (2, 4)),
        ("12.4.1", (12, 4, 1)),
    ],
)
def test_parse_int_path(text, expected):
    assert parse_int_path(text) == expected


def test_parse_int_path_error():
    with pytest.raises(ValueError):
        parse_int_path("2.x")


def test_io():
    # values from linux/usbdevice_fs.h
    assert IO("U", 31) == USBIOC.GET_SPEED == 0x551F
    assert IO(ord("U"), 22) == 0x5516


def test_ioc_size():
    assert IOC(NONE, "U", 0, 4) == IOC(NONE, "U", 0, ctypes.c_uint32) == 0x00045500

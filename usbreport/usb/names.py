#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Human readable labels for USB class and speed codes"""

import enum
from types import MappingProxyType

from .raw import Class, Speed

UNKNOWN = "?"


class SpeedFormat(enum.Enum):
    VERBOSE = "verbose"
    COMPACT = "compact"


CLASS_NAMES = MappingProxyType(
    {
        Class.AUDIO: "audio",
        Class.COMM: "communication",
        Class.HID: "human-interface",
        Class.PHYSICAL: "physical",
        Class.IMAGE: "image",
        Class.PRINTER: "printer",
        Class.MASS_STORAGE: "mass-storage",
        Class.HUB: "hub",
        Class.DATA: "data",
        Class.SMART_CARD: "smart-card",
        Class.VIDEO: "video",
    }
)


SPEED_NAMES = MappingProxyType(
    {
        SpeedFormat.VERBOSE: MappingProxyType(
            {
                Speed.UNKNOWN: "unknown",
                Speed.LOW: "low(    1.5Mbps)",
                Speed.FULL: "full(    12Mbps)",
                Speed.HIGH: "high(   480Mbps)",
                Speed.SUPER: "super( 5000Mbps)",
                Speed.SUPER_PLUS: "super plus(10000Mbps)",
                Speed.SUPER_PLUS_X2: "super plus x2(20000Mbps)",
            }
        ),
        # right justified on 9 characters
        SpeedFormat.COMPACT: MappingProxyType(
            {
                Speed.UNKNOWN: "  unknown",
                Speed.LOW: "  1.5Mbps",
                Speed.FULL: "   12Mbps",
                Speed.HIGH: "  480Mbps",
                Speed.SUPER: " 5000Mbps",
                Speed.SUPER_PLUS: "10000Mbps",
                Speed.SUPER_PLUS_X2: "20000Mbps",
            }
        ),
    }
)


def class_name(class_id: int) -> str:
    """Short label for a USB-IF device class code. Unknown codes give "?" """
    return CLASS_NAMES.get(class_id, UNKNOWN)


def speed_name(speed: int, fmt: SpeedFormat = SpeedFormat.COMPACT) -> str:
    """Bandwidth label for a speed code. Unknown codes give "?" """
    return SPEED_NAMES[fmt].get(speed, UNKNOWN)

#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

from .base import (
    DescriptorReadError,
    EndpointNotFoundError,
    InitializationError,
    PacketSizeReadError,
    PacketSizeUnavailable,
    SnapshotError,
    USBError,
)
from .core import Context, Snapshot
from .names import SpeedFormat, class_name, speed_name
from .raw import Class, DescriptorType, Speed

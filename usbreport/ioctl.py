#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""ioctl helper functions"""

import ctypes
import enum
import fcntl
import logging

# request number layout from asm-generic/ioctl.h
NRBITS = 8
TYPEBITS = 8
SIZEBITS = 14

NRSHIFT = 0
TYPESHIFT = NRSHIFT + NRBITS
SIZESHIFT = TYPESHIFT + TYPEBITS
DIRSHIFT = SIZESHIFT + SIZEBITS

NONE = 0

log = logging.getLogger(__name__)


def IOC(direction, magic, number, size=0):
    """Encode an ioctl request number. size is a byte count or a ctypes type"""
    if isinstance(magic, str):
        magic = ord(magic)
    if not isinstance(size, int):
        size = ctypes.sizeof(size)
    return (direction << DIRSHIFT) | (magic << TYPESHIFT) | (number << NRSHIFT) | (size << SIZESHIFT)


def IO(magic, number):
    return IOC(NONE, magic, number)


def ioctl(fd, request, *args):
    """
    Perform the request on the given file descriptor.

    Returns the (possibly mutated) first argument if one was given,
    otherwise the integer returned by the OS.
    """
    req = request.name if isinstance(request, enum.Enum) else request
    log.debug("request=%s, arg=%s", req, args)
    result = fcntl.ioctl(fd, request, *args)
    return args[0] if args else result

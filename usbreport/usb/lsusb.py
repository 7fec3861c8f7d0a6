#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""
One line summary of every USB device attached to the host.

```
$ python -m usbreport
Thar be 2 USB devices.
USB class: hub | speed:   480Mbps | cannot read packet size | 1d6b:0002 (bus 1, device 1)
USB class: ? | speed:    12Mbps | cannot read packet size | 0403:6015 (bus 1, device 7) | port number:  2.4
```
"""

import argparse
import logging
import sys

from ..types import Iterator, Optional, Sequence, TextIO
from .base import BaseDevice, DescriptorReadError, InitializationError, PacketSizeUnavailable
from .core import Context
from .descriptor import DeviceDescriptor
from .names import SpeedFormat, class_name, speed_name
from .raw import DescriptorType

log = logging.getLogger(__name__)

# maximum number of devices reported
DEVICE_LIMIT = 255

# endpoint queried for the max iso packet size
ISO_ENDPOINT = 0

PACKET_SIZE_UNAVAILABLE = "cannot read packet size"


def format_descriptor(desc: DeviceDescriptor) -> str:
    """Every field of a device descriptor. Empty if desc is not a device descriptor"""
    if desc.bDescriptorType != DescriptorType.DEVICE:
        return ""
    return f"""\
\tUSB{{ 'spec':{desc.bcdUSB:04x}, 'class':{desc.class_id}({class_name(desc.class_id)}), 'subclass':{desc.subclass_id},
\t     'protocol':{desc.protocol_id}, 'max-packet-size':{desc.bMaxPacketSize0},
\t     'vendor-id':{desc.vendor_id:04x}, 'product-id':{desc.product_id:04x}, 'release-number(bcd)':{desc.bcdDevice:04x},
\t     'manufacturer-index':{desc.iManufacturer}, 'serial-number-index':{desc.iSerialNumber},
\t     'num-possible-configs':{desc.nb_configurations}, }}"""


def print_descriptor(desc: DeviceDescriptor, file: Optional[TextIO] = None):
    text = format_descriptor(desc)
    if text:
        print(text, file=file)


def format_port_path(ports: Sequence[int]) -> str:
    """Example: (12, 4) gives "12.4" and (2, 4, 1) gives " 2.4.1" """
    first, *rest = ports
    return f"{first:2d}" + "".join(f".{port}" for port in rest)


def packet_size_text(device: BaseDevice, endpoint: int = ISO_ENDPOINT) -> str:
    try:
        size = device.max_iso_packet_size(endpoint)
    except PacketSizeUnavailable as error:
        log.debug("%s", error)
        return PACKET_SIZE_UNAVAILABLE
    return f"max iso packet size: {size}"


def device_line(device: BaseDevice, desc: DeviceDescriptor) -> str:
    line = (
        f"USB class: {class_name(desc.class_id)} | "
        f"speed: {speed_name(device.speed, SpeedFormat.COMPACT)} | "
        f"{packet_size_text(device)} | "
        f"{desc.vendor_id:04x}:{desc.product_id:04x} (bus {device.bus_number}, device {device.device_address})"
    )
    ports = device.port_numbers
    if ports:
        line += f" | port number: {format_port_path(ports)}"
    return line


def iter_report(
    devices: Sequence[BaseDevice], limit: int = DEVICE_LIMIT, skip_errors: bool = False, verbose: bool = False
) -> Iterator[str]:
    """
    Report lines for the given devices, in order. At most `limit` devices
    are reported.

    A device whose descriptor cannot be read aborts the report
    (DescriptorReadError propagates) unless skip_errors is True, in which
    case the device is left out.
    """
    for index, device in enumerate(devices):
        if index >= limit:
            log.warning("device limit reached: only first %d of %d devices reported", limit, len(devices))
            break
        try:
            desc = device.read_descriptor()
        except DescriptorReadError as error:
            if not skip_errors:
                raise
            log.error("skipping device: %s", error)
            continue
        yield device_line(device, desc)
        if verbose:
            text = format_descriptor(desc)
            if text:
                yield text


def report(
    devices: Sequence[BaseDevice],
    file: Optional[TextIO] = None,
    limit: int = DEVICE_LIMIT,
    skip_errors: bool = False,
    verbose: bool = False,
):
    print(f"Thar be {len(devices)} USB devices.", file=file)
    for line in iter_report(devices, limit=limit, skip_errors=skip_errors, verbose=verbose):
        print(line, file=file)


def lsusb(file: Optional[TextIO] = None, skip_errors: bool = False, verbose: bool = False) -> int:
    """Report the devices attached to the host. Returns the process exit code"""
    try:
        with Context() as ctx, ctx.snapshot() as devices:
            try:
                report(devices, file=file, skip_errors=skip_errors, verbose=verbose)
            except DescriptorReadError as error:
                log.error("report aborted: %s", error)
                print(f"ERROR - Failed to get device descriptor: {error}", file=file)
    except InitializationError as error:
        log.error("%s", error)
        print("Failed to initialize.", file=file)
        return -1
    return 0


def cli():
    parser = argparse.ArgumentParser(prog="usbreport", description="List the USB devices attached to this host")
    parser.add_argument("-v", "--verbose", action="store_true", help="dump the device descriptor of each device")
    parser.add_argument(
        "--skip-errors", action="store_true", help="skip devices whose descriptor cannot be read instead of stopping"
    )
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], default="warning")
    return parser


def main(args=None) -> int:
    parser = cli()
    args = parser.parse_args(args=args)
    fmt = "%(asctime)-15s %(levelname)-5s %(name)s: %(message)s"
    logging.basicConfig(level=args.log_level.upper(), format=fmt, stream=sys.stderr)
    return lsusb(skip_errors=args.skip_errors, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())

#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import contextlib
import logging
import os
import pathlib

from usbreport.types import PathLike, Self

log = logging.getLogger(__name__)


class ReentrantOpen(contextlib.AbstractContextManager):
    """
    Context manager which opens on the outermost enter and closes on the
    outermost exit. Not thread safe.
    """

    def __init__(self):
        self._context_level = 0

    def __enter__(self) -> Self:
        if not self._context_level:
            self.open()
        self._context_level += 1
        return self

    def __exit__(self, *exc):
        self._context_level -= 1
        if not self._context_level:
            self.close()

    def open(self):
        """Mandatory override for concrete sub-class"""
        raise NotImplementedError

    def close(self):
        """Mandatory override for concrete sub-class"""
        raise NotImplementedError


def open_device_file(path: PathLike):
    """Open a device file for unbuffered, non-blocking binary reading"""

    def opener(path, flags):
        return os.open(path, flags | os.O_NONBLOCK | os.O_CLOEXEC)

    return open(path, "rb", buffering=0, opener=opener)


class DeviceFile(ReentrantOpen):
    """Read-only device file, only open inside a `with` block"""

    def __init__(self, filename: PathLike, opener=open_device_file):
        super().__init__()
        self.filename = pathlib.Path(filename)
        self.log = log.getChild(self.filename.name)
        self._opener = opener
        self._fobj = None

    def __repr__(self):
        return f"<{type(self).__name__} name={self.filename}, closed={self.closed}>"

    @property
    def closed(self) -> bool:
        return self._fobj is None

    def _file(self):
        if self._fobj is None:
            raise ValueError(f"{self.filename} is not open")
        return self._fobj

    def open(self):
        if self._fobj is None:
            self._fobj = self._opener(self.filename)
            self.log.debug("opened %s", self.filename)

    def close(self):
        fobj, self._fobj = self._fobj, None
        if fobj is not None:
            fobj.close()
            self.log.debug("closed %s", self.filename)

    def fileno(self) -> int:
        return self._file().fileno()

    def read(self) -> bytes:
        return self._file().read()

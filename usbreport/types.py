#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import collections.abc
import os
import pathlib
import typing

if hasattr(typing, "Self"):  # 3.11+
    Self = typing.Self
else:
    import typing_extensions

    Self = typing_extensions.Self

Optional = typing.Optional
PathLike = typing.Union[str, pathlib.Path, os.PathLike]
TextIO = typing.TextIO


Iterable = collections.abc.Iterable
Iterator = collections.abc.Iterator
Callable = collections.abc.Callable
Sequence = collections.abc.Sequence
NamedTuple = typing.NamedTuple

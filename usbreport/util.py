#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Utility functions used by the library. Mostly for internal usage"""


def parse_int_path(text: str, separator: str = ".") -> tuple[int, ...]:
    """
    Split text into a tuple of integers.

    Example: parse_int_path("2.4.1") gives (2, 4, 1). Empty text gives ().
    """
    if not text:
        return ()
    return tuple(int(item) for item in text.split(separator))

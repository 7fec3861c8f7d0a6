#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Human friendly report of the USB devices attached to a linux host"""

__version__ = "0.1.0"

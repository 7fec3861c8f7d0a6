#
# This file is part of the usbreport project
#
# Copyright (c) 2026 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

import sys

from usbreport.usb.lsusb import main

sys.exit(main())

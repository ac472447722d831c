# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

import sys

from trustroot_assembler.scripts.assemble import main

sys.exit(main())

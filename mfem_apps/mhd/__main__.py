"""
MHD initial condition main module.
"""

import sys
from .run import main

sys.exit(main())

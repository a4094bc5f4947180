"""
Diffusion example main module.
"""

import sys
from .diffusion import main

sys.exit(main())

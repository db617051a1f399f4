"""python -m council.cli <command>"""

import sys

from .main import main

sys.exit(main())

"""Allow ``python -m livephoto_repair``."""

import sys

from .cli import main

sys.exit(main())

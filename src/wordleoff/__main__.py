"""Allow ``python -m wordleoff``."""

import sys

from .cli import main

sys.exit(main())

"""Allow ``python -m minilisp``."""

import sys

from minilisp.cli import main

sys.exit(main())

"""Allow ``python -m print_finder``."""

import sys

from print_finder.cli import main

sys.exit(main())

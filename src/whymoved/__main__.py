"""Allow `python -m whymoved`."""

import sys

from whymoved.cli import main

sys.exit(main())

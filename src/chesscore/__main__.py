"""Allow ``python -m chesscore``."""

import sys

from chesscore.app import main

sys.exit(main())

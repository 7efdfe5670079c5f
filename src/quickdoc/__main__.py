"""Allow ``python -m quickdoc``."""

import sys

from quickdoc.cli import main

sys.exit(main())

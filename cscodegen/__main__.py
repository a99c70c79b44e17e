"""Allow running cscodegen with ``python -m cscodegen``."""

import sys

from .cli import main

sys.exit(main())

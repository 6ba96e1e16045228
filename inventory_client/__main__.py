"""Allow ``python -m inventory_client``."""

import sys

from inventory_client.cli import main

sys.exit(main())

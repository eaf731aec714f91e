"""Allow ``python -m bustrack_admin``."""

import sys

from bustrack_admin.cli import main

sys.exit(main())

"""Allow `python -m deadline_executor` to launch the executor."""

import sys

from deadline_executor.main import main

sys.exit(main())

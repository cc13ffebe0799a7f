"""Allow running the engine with `python -m anagramladder`."""

import sys

from anagramladder import main

sys.exit(main())

"""Allow `python -m eye_finder`."""

import sys

from eye_finder.core import main

raise SystemExit(main(sys.argv[1:]))

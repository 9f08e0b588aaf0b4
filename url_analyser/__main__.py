# Allows the package to be run as a script using `python -m url_analyser`

from __future__ import annotations

import sys

from url_analyser.cli import main

if __name__ == "__main__":
    sys.exit(main())

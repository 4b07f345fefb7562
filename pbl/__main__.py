#!/usr/bin/env python3
# pbl/__main__.py - python -m pbl

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())

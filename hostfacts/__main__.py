#!/usr/bin/env python3
# hostfacts/__main__.py
from __future__ import annotations

import sys

from hostfacts.interface import main

if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""clockeroo entry point.

Run with:
    python main.py timer 5m
    python -m clockeroo stopwatch start
"""

import sys

from clockeroo.__main__ import main


if __name__ == "__main__":
    sys.exit(main())

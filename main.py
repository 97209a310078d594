#!/usr/bin/env python3
"""Tomatodo — entry point.

Run with:
    python main.py
    python -m tomatodo
"""

from tomatodo.__main__ import main


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Holdfast — entry point.

Run with:
    python main.py
    python -m holdfast
"""

from holdfast.__main__ import main


if __name__ == "__main__":
    main()

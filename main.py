#!/usr/bin/env python3
"""IntervalFlow — entry point.

Run with:
    python main.py
    python -m intervalflow
"""

from intervalflow.__main__ import main


if __name__ == "__main__":
    main()

"""
Wrapper to run the lsh interpreter.

Usage:
  python main.py
  python main.py --editor prompt
  python main.py --no-color
"""

from lsh import main


if __name__ == "__main__":
    raise SystemExit(main())

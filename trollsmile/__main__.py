"""
Entry point for trollsmile.

Usage:
    python -m trollsmile
"""

from .cli import main

if __name__ == "__main__":
    main()

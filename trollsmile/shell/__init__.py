"""
trollsmile interactive shell

Reads lines from the console and dispatches them to the loaded commands.

Usage:
    python -m trollsmile
    trollsmile run  # If installed

Copyright 2025 Firefly Software Solutions Inc
Licensed under the Apache License, Version 2.0
"""

from .core.shell import ConsoleChannel, TrollsmileShell

__all__ = ["ConsoleChannel", "TrollsmileShell"]
